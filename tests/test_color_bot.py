# pylint: disable=all

import json
from pathlib import Path

import pytest
from nextcord.ext import commands

from colorbot.color_bot import ColorBot
from colorbot.errors import InvalidSettingsFile


def _write(path: Path, data: object) -> None:
    path.write_text(json.dumps(data), encoding="utf-8")


def test_load_settings(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    _write(path, {"PREFIX": "?", "OWNER_ID": 123})
    assert ColorBot.load_settings(path) == {"PREFIX": "?", "OWNER_ID": 123}


def test_load_settings_without_owner(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    _write(path, {"PREFIX": "!"})
    assert ColorBot.load_settings(path).get("OWNER_ID") is None


def test_load_settings_creates_prototype(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    with pytest.raises(InvalidSettingsFile):
        ColorBot.load_settings(path)
    assert json.loads(path.read_text(encoding="utf-8")) == {
        "PREFIX": "!",
        "OWNER_ID": None,
    }


@pytest.mark.parametrize(
    "data",
    [
        [],
        {},
        {"PREFIX": ""},
        {"PREFIX": 1},
        {"PREFIX": "!", "OWNER_ID": "123"},
        {"PREFIX": "!", "OWNER_ID": True},
    ],
)
def test_load_invalid_settings(tmp_path: Path, data: object) -> None:
    path = tmp_path / "settings.json"
    _write(path, data)
    with pytest.raises(InvalidSettingsFile):
        ColorBot.load_settings(path)


def test_load_corrupted_settings(tmp_path: Path) -> None:
    path = tmp_path / "settings.json"
    path.write_text("{", encoding="utf-8")
    with pytest.raises(InvalidSettingsFile):
        ColorBot.load_settings(path)


@pytest.fixture
def delegated(monkeypatch: pytest.MonkeyPatch) -> list[Exception]:
    calls: list[Exception] = []

    async def on_command_error(self, context, exception) -> None:
        calls.append(exception)

    monkeypatch.setattr(commands.Bot, "on_command_error", on_command_error)
    return calls


@pytest.mark.asyncio
async def test_unregistered_prefix_command_is_ignored(delegated: list[Exception]) -> None:
    bot = ColorBot.__new__(ColorBot)
    error = commands.CommandNotFound('Command "color" is not found')
    await bot.on_command_error(None, error)  # type: ignore
    assert delegated == []


@pytest.mark.asyncio
async def test_other_command_errors_are_delegated(delegated: list[Exception]) -> None:
    bot = ColorBot.__new__(ColorBot)
    error = commands.CommandError("boom")
    await bot.on_command_error(None, error)  # type: ignore
    assert delegated == [error]
