# SPDX-License-Identifier: MIT
"""A module containing the main class of the bot.

The :class:`ColorBot` class is used to initialize the bot.

Examples
-------- ::

    from colorbot.color_bot import ColorBot

    class Cog(commands.Cog):
        def __init__(self, bot: ColorBot) -> None:
            self.bot = bot

    def setup(bot: ColorBot) -> None:
        bot.add_cog(Cog(bot))
"""

from __future__ import annotations

import json
import os
import time
from pathlib import Path
from typing import Any

import dotenv
import nextcord
from nextcord.ext import commands
from nextcord.flags import Intents

from colorbot.console import Console
from colorbot.errors import InvalidSettingsFile


class ColorBot(commands.Bot):
    """:class:`commands.Bot` configured from the `settings.json` file.

    Can be used as an alias in the cog class,
    because Discord API sends the :class:`commands.Bot`
    parameter in :func:`setup` in the cog's file.
    """

    __slots__ = ("_prefix",)

    _prefix: str

    _SETTINGS_PATH = Path("settings.json")
    _SETTINGS_PROTOTYPE: dict[str, Any] = {"PREFIX": "!", "OWNER_ID": None}

    _cog_names = [
        "colorbot.color_roles",
    ]

    def __init__(self) -> None:
        dotenv.load_dotenv()

        intents = Intents.default()
        intents.members = True
        intents.message_content = True

        try:
            settings = self.load_settings(self._SETTINGS_PATH)
        except InvalidSettingsFile as e:
            Console.critical_error(str(e))

        self._prefix = settings["PREFIX"]

        super().__init__(
            command_prefix=self._prefix,
            intents=intents,
            case_insensitive=True,
            owner_id=settings.get("OWNER_ID"),
        )

        for cog_name in self._cog_names:
            self.load_cog(cog_name)

    @classmethod
    def load_settings(cls, path: Path) -> dict[str, Any]:
        """Loads and validates the settings file.

        If the file does not exist, a prototype is created.

        Parameters
        ----------
        path: :class:`Path`
            The path to the settings file.

        Raises
        ------
        InvalidSettingsFile
            The file did not exist, is not valid JSON or has invalid values.
        """

        if not path.exists():
            with open(path, "w", encoding="utf-8") as f:
                json.dump(cls._SETTINGS_PROTOTYPE, f, indent=4)
            raise InvalidSettingsFile(
                f"The '{path}' file did not exist.\n"
                "A prototype has been created.\n"
                "Complete it and start the bot again."
            )

        try:
            with open(path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise InvalidSettingsFile(f"Cannot read '{path}': {e}") from e

        if not isinstance(data, dict):
            raise InvalidSettingsFile(f"'{path}' must contain an object")

        prefix = data.get("PREFIX")
        if not isinstance(prefix, str) or not prefix:
            raise InvalidSettingsFile(f"PREFIX in '{path}' must be a non-empty str")

        owner_id = data.get("OWNER_ID")
        if owner_id is not None and (
            isinstance(owner_id, bool) or not isinstance(owner_id, int)
        ):
            raise InvalidSettingsFile(f"OWNER_ID in '{path}' must be int or null")

        return data

    async def on_command_error(
        self, context: commands.Context, exception: commands.CommandError
    ) -> None:
        """Ignores messages that look like prefix commands but are not registered.

        The colour commands are plain messages handled by cog listeners,
        so they are never found among the registered commands.
        """
        if isinstance(exception, commands.CommandNotFound):
            return
        await super().on_command_error(context, exception)

    @property
    def prefix(self) -> str:
        """The prefix of the text commands."""
        return self._prefix

    def load_cog(self, cog_name: str) -> bool:
        """Loads the cog.

        Parameters
        ----------
        cog_name : str
            The name of the cog to load.

        Returns
        -------
        bool
            Whether the cog has been loaded successfully.
        """
        start_time = time.time()

        try:
            self.load_extension(cog_name)
            load_time = (time.time() - start_time) * 1000
            Console.info(f"Cog '{cog_name}' has been loaded! ({load_time:.2f}ms)")
            return True
        except (
            commands.ExtensionError,
            ModuleNotFoundError,
            nextcord.errors.HTTPException,
        ) as e:
            Console.error(f"Cog '{cog_name}' couldn't be loaded!", exception=e)
            return False

    def main(self) -> None:
        """Runs the bot using `BOT_TOKEN` received from `.env` file."""
        token = os.environ.get("BOT_TOKEN")
        if not token:
            Console.critical_error("BOT_TOKEN is not set in the '.env' file.")
        self.run(token)
