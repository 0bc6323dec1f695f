# pylint: disable=all

import pytest

from colorbot.color_roles import ColorRolesModel
from colorbot.console import Console
from colorbot.errors import ArgumentError, ExceptionData, NotFoundError
from colorbot.utils import CommandUtils, MemberUtils, MessageUtils, ParsedCommand, PathUtils

from .mocks import *

COMMANDS = ["color me", "manage color", "stop managing"]


def test_parse_command() -> None:
    result = CommandUtils.parse("!Manage Color Red  Blue", ["!"], COMMANDS)
    assert result == ParsedCommand("manage color", ["Red", "Blue"])
    assert str(result) == "manage color Red Blue"


def test_parse_command_without_args() -> None:
    assert CommandUtils.parse("!color me", ["!"], COMMANDS) == ParsedCommand("color me")


def test_parse_command_with_space_after_prefix() -> None:
    result = CommandUtils.parse("<@1>   color   me red", ["!", "<@1>"], COMMANDS)
    assert result == ParsedCommand("color me", ["red"])


@pytest.mark.parametrize(
    "content",
    ["color me red", "?color me red", "!color mered", "!colorme red", "!", ""],
)
def test_parse_not_a_command(content: str) -> None:
    assert CommandUtils.parse(content, ["!"], COMMANDS) is None


def test_parse_ignores_empty_prefix() -> None:
    assert CommandUtils.parse("color me red", [""], COMMANDS) is None


def test_convert_member_without_unique_name_to_string() -> None:
    member = MemberMock(name="TestName", id=1234567890, roles=[], discriminator="1234")
    assert MemberUtils.convert_to_string(member) == "TestName#1234"  # type: ignore


def test_convert_member_with_unique_name_to_string() -> None:
    # if member has a unique name, discriminator is 0
    member = MemberMock(name="TestName", id=1234567890, roles=[], discriminator="0")
    assert MemberUtils.convert_to_string(member) == "TestName"  # type: ignore


def test_convert_classname_to_filename() -> None:
    assert PathUtils.convert_classname_to_filename(ColorRolesModel()) == "color_roles"


class _Cog:
    @MessageUtils.with_reply(
        catch_exceptions=[ExceptionData(ArgumentError, with_traceback_in_log=False)]
    )
    @MessageUtils.with_log()
    async def handler(self, message, command: ParsedCommand) -> str:
        if not command.args:
            raise ArgumentError("No args")
        if command.args == ["missing"]:
            raise NotFoundError("Not found")
        return "ok"


@pytest.fixture
def message() -> MessageMock:
    author = MemberMock(name="TestName", id=1, roles=[])
    return MessageMock("!color me", author, GuildMock())


@pytest.mark.asyncio
async def test_with_reply_returns_result(message: MessageMock) -> None:
    result = await _Cog().handler(message, ParsedCommand("color me", ["red"]))
    assert result == "ok"
    assert message.channel.sent == []


@pytest.mark.asyncio
async def test_with_reply_replies_caught_exception(message: MessageMock) -> None:
    result = await _Cog().handler(message, ParsedCommand("color me"))
    assert result is None
    assert message.channel.sent == ["No args"]


@pytest.mark.asyncio
async def test_with_reply_reraises_other_exceptions(message: MessageMock) -> None:
    with pytest.raises(NotFoundError):
        await _Cog().handler(message, ParsedCommand("color me", ["missing"]))
    assert message.channel.sent == []


class _LoggedCog:
    @MessageUtils.with_log(show_channel=True)
    async def with_channel(self, message, command: ParsedCommand) -> None:
        pass

    @MessageUtils.with_log()
    async def without_channel(self, message, command: ParsedCommand) -> None:
        pass


@pytest.mark.asyncio
async def test_with_log_shows_channel(
    message: MessageMock, monkeypatch: pytest.MonkeyPatch
) -> None:
    logged: list[str] = []
    monkeypatch.setattr(
        Console, "specific", lambda text, type_, colour: logged.append(type_)
    )

    await _LoggedCog().with_channel(message, ParsedCommand("color me", ["red"]))
    await _LoggedCog().without_channel(message, ParsedCommand("color me", ["red"]))

    assert logged == ["TEXT_COMMAND/general", "TEXT_COMMAND"]
