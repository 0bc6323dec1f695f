# SPDX-License-Identifier: MIT
"""A module containing utility classes and functions."""

from __future__ import annotations

import functools
import re
from abc import ABC
from dataclasses import dataclass, field
from typing import (
    TYPE_CHECKING,
    Any,
    Awaitable,
    Callable,
    Concatenate,
    Iterable,
    ParamSpec,
)

from nextcord.threads import Thread

from colorbot.console import Console, FontColour
from colorbot.errors import ExceptionData

if TYPE_CHECKING:
    from nextcord.member import Member
    from nextcord.message import Message
    from nextcord.user import User

    _P = ParamSpec("_P")
    _FUNC = Callable[Concatenate[Any, "Message", "ParsedCommand", _P], Awaitable[Any]]


@dataclass(slots=True, frozen=True)
class ParsedCommand:
    """A text command split into its name and argument tokens.

    Attributes
    ----------
    name: :class:`str`
        The matched command phrase, e.g. ``"color me"``.
    args: list[:class:`str`]
        Whitespace-delimited tokens after the command phrase.
    """

    name: str
    args: list[str] = field(default_factory=list)

    def __str__(self) -> str:
        return " ".join([self.name, *self.args])


class CommandUtils(ABC):  # pylint: disable=too-few-public-methods
    """A class containing utility methods for text commands.

    This class should not be instantiated.
    """

    @staticmethod
    def parse(
        content: str,
        prefixes: Iterable[str],
        commands: Iterable[str],
    ) -> ParsedCommand | None:
        """Parses the message content into a command.

        The content must start with one of the prefixes.
        The command phrase is matched case-insensitively and must be
        followed by whitespace or the end of the content.

        Parameters
        ----------
        content: :class:`str`
            The content of the message.
        prefixes: Iterable[:class:`str`]
            Accepted prefixes, e.g. ``"!"`` or the bot mention.
        commands: Iterable[:class:`str`]
            Command phrases, checked in the given order.

        Returns
        -------
        :class:`ParsedCommand` | `None`
            The parsed command or `None` if the content is not a command.

        Examples
        -------- ::

            CommandUtils.parse("!Color me Red", ["!"], ["color me"])
            # ParsedCommand(name='color me', args=['Red'])
        """

        content = content.strip()
        for prefix in prefixes:
            if prefix and content.startswith(prefix):
                rest = content[len(prefix) :].lstrip()
                break
        else:
            return None

        tokens = rest.split()
        lowered = [token.lower() for token in tokens]
        for command in commands:
            words = command.lower().split()
            if lowered[: len(words)] == words:
                return ParsedCommand(command, tokens[len(words) :])
        return None


class MessageUtils(ABC):
    """A class containing static methods that can be used to decorate text command handlers.

    Decorated handlers take the cog, the :class:`Message`
    and the :class:`ParsedCommand` as their first arguments.

    This class should not be instantiated.
    """

    @staticmethod
    def with_log(
        colour: FontColour = FontColour.PINK, show_channel: bool = False
    ) -> Callable[[_FUNC], _FUNC]:
        """Logs information about the user who ran a decorated command to the console.

        Parameters
        ----------
        colour: :class:`FontColour`
            The colour of the log message.
        show_channel: :class:`bool`
            Whether to show the channel name in the log message.
            Defaults to `False`.
        """

        def decorator(func: _FUNC) -> _FUNC:
            @functools.wraps(func)
            async def wrapper(
                self,
                message: Message,
                command: ParsedCommand,
                *args: _P.args,
                **kwargs: _P.kwargs,
            ) -> Any:
                type_info = "TEXT_COMMAND"
                author: Member = message.author  # type: ignore

                if show_channel:
                    channel = message.channel
                    if isinstance(channel, Thread) and channel.parent:
                        type_info += f"/{channel.parent.name}/{channel.name}"
                    elif name := getattr(channel, "name", None):
                        type_info += f"/{name}"

                Console.specific(
                    f"{author.display_name} ({MemberUtils.convert_to_string(author)}) "
                    f"used '{command}'",
                    type_info,
                    colour,
                )
                return await func(self, message, command, *args, **kwargs)

            return wrapper

        return decorator

    @staticmethod
    def with_reply(
        *,
        catch_exceptions: list[type[Exception] | ExceptionData] | None = None,
    ) -> Callable[[_FUNC], _FUNC]:
        """Replies in the message channel when a decorated handler raises.

        The reply content is the exception message, so exceptions raised
        by handlers should carry user-facing text.
        Exceptions not listed in ``catch_exceptions`` are re-raised.

        Examples
        -------- ::

            @MessageUtils.with_reply(catch_exceptions=[ArgumentError])
            async def _color_me(self, message, command) -> None:
                if not command.args:
                    raise ArgumentError("You forgot to name a color.")

        Parameters
        ----------
        catch_exceptions: list[type[:class:`Exception`] | :class:`ExceptionData`] | `None`
            An optional list of exceptions or exception data to catch.
            Defaults to `None`.
        """

        def decorator(func: _FUNC) -> _FUNC:
            @functools.wraps(func)
            async def wrapper(
                self,
                message: Message,
                command: ParsedCommand,
                *args: _P.args,
                **kwargs: _P.kwargs,
            ) -> Any:
                async def catch_error(exc: Exception, exc_data: ExceptionData) -> None:
                    reply = str(exc)
                    if len(reply) > 2000:
                        reply = f"{reply[:496]}\n\n...\n\n{reply[-1496:]}"

                    await message.channel.send(reply)

                    if exc_data.with_traceback_in_log:
                        Console.error(f"Error while using '{command.name}'.", exception=exc)
                    else:
                        Console.error(f"Error while using '{command.name}'. {exc}")

                try:
                    return await func(self, message, command, *args, **kwargs)
                except Exception as e:  # pylint: disable=broad-except
                    for exc_data in catch_exceptions or []:
                        if isinstance(exc_data, type):
                            exc_data = ExceptionData(exc_data)

                        if isinstance(e, exc_data.type):
                            await catch_error(e, exc_data)
                            break
                    else:
                        raise e
                    return None

            return wrapper

        return decorator


class MemberUtils(ABC):  # pylint: disable=too-few-public-methods
    """A class containing utility methods for members.

    This class should not be instantiated.
    """

    @staticmethod
    def convert_to_string(member: Member | User) -> str:
        """Converts a member to a string.

        If the member has a unique name (discriminator '0'),
        only the name is returned. Otherwise, ``name#discriminator``.
        """
        if member.discriminator in (None, "0"):
            return member.name
        return f"{member.name}#{member.discriminator}"


class PathUtils(ABC):  # pylint: disable=too-few-public-methods
    """A class containing utility methods for paths."""

    @staticmethod
    def convert_classname_to_filename(obj: object) -> str:
        """Converts a class name to a filename.

        If classname ends with 'Model', the last word is removed.

        Examples
        -------- ::

            class ColorRolesModel:
                pass

            convert_classname_to_filename(ColorRolesModel())  # 'color_roles'
        """

        ret = re.sub("(?<!^)(?=[A-Z])", "_", obj.__class__.__name__).lower()
        if ret.endswith("_model"):
            return "_".join(ret.split("_")[:-1])
        return ret
