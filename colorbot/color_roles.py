# SPDX-License-Identifier: MIT
"""A module to let members choose their colour role.

Members pick a colour with `color me <color>`.
The colour is a role looked up by its name (case-insensitive).
Roles that grant real power over the server are never handed out.

The owner chooses which roles are colours with
`manage color <color> [<color> ...]` and `stop managing <color> [<color> ...]`.
When a member picks a new colour, every managed role they hold is removed first,
so a member wears one managed colour at a time.

The managed role names are stored in the `data/color_roles.json` file.
"""

from __future__ import annotations

import asyncio
import json
from typing import TYPE_CHECKING, Awaitable, Callable

import nextcord
from nextcord.ext import commands

from colorbot.console import Console
from colorbot.errors import (
    ArgumentError,
    AuthorizationError,
    DeserializationError,
    ExceptionData,
    NotFoundError,
    RemoteOperationError,
    SerializationError,
)
from colorbot.models import Controller, Model
from colorbot.permissions import authority_flags_of, grants_authority
from colorbot.utils import CommandUtils, MessageUtils, ParsedCommand

if TYPE_CHECKING:
    from nextcord.guild import Guild
    from nextcord.member import Member
    from nextcord.message import Message
    from nextcord.role import Role

    from colorbot import ColorBot

Reply = Callable[[str], Awaitable[object]]

COLOR_COMMAND = "color me"
MANAGE_COLOR_COMMAND = "manage color"
STOP_MANAGING_COMMAND = "stop managing"
HELP_COMMAND = "color help"


class ManagedRoleSet:
    """Names of the roles treated as colours.

    Maps a lower-cased role name to whether it is currently managed.
    Only names added with :meth:`add` (or loaded) are present.
    """

    __slots__ = ("_roles",)

    _roles: dict[str, bool]

    def __init__(self, roles: dict[str, bool] | None = None) -> None:
        self._roles = {}
        for name, managed in (roles or {}).items():
            self._roles[name.lower()] = managed

    def __contains__(self, name: object) -> bool:
        return isinstance(name, str) and self._roles.get(name.lower(), False)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, ManagedRoleSet):
            return NotImplemented
        return self._roles == other._roles

    def __repr__(self) -> str:
        return f"<ManagedRoleSet roles={self._roles!r}>"

    def add(self, name: str) -> None:
        """Marks the role as managed."""
        self._roles[name.lower()] = True

    def remove(self, name: str) -> None:
        """Forgets the role.

        Raises
        ------
        KeyError
            The role is not in the set.
        """
        del self._roles[name.lower()]

    @property
    def names(self) -> list[str]:
        """Sorted names of the managed roles."""
        return sorted(name for name, managed in self._roles.items() if managed)

    def to_bytes(self) -> bytes:
        """Serializes the set as `{"managedRoles": {name: bool}}` JSON.

        Raises
        ------
        SerializationError
            The set contains values that cannot be serialized.
        """
        try:
            return json.dumps({"managedRoles": self._roles}).encode("utf-8")
        except (TypeError, ValueError) as e:
            raise SerializationError(*e.args) from e

    @classmethod
    def from_bytes(cls, data: bytes) -> ManagedRoleSet:
        """Deserializes bytes produced by :meth:`to_bytes`.

        A missing `managedRoles` key means an empty set.

        Raises
        ------
        DeserializationError
            The data is not valid JSON or has an unexpected shape.
        """
        try:
            raw = json.loads(data.decode("utf-8"))
        except (UnicodeDecodeError, json.JSONDecodeError) as e:
            raise DeserializationError(f"Invalid JSON: {e}") from e

        if not isinstance(raw, dict):
            raise DeserializationError("The root must be an object")

        roles = raw.get("managedRoles", {})
        if not isinstance(roles, dict):
            raise DeserializationError("managedRoles must be an object")

        for name, managed in roles.items():
            if not isinstance(managed, bool):
                raise DeserializationError(f"Flag of '{name}' must be bool")

        return cls(roles)


class ColorRolesModel(Model):
    """Represents the colour roles model.

    Attributes
    ----------
    managed_roles: :class:`ManagedRoleSet`
        The names of the roles treated as colours.
    """

    __slots__ = ("managed_roles",)

    managed_roles: ManagedRoleSet

    def __init__(self) -> None:
        self.managed_roles = ManagedRoleSet()

    def load(self, data: bytes | None) -> None:
        """Replaces the managed roles with the ones stored in ``data``.

        Malformed data is logged and the current roles are kept.
        """
        if not data:
            return
        try:
            self.managed_roles = ManagedRoleSet.from_bytes(data)
        except DeserializationError as e:
            Console.warn(f"Managed roles could not be loaded. {e}")

    def save(self) -> bytes:
        return self.managed_roles.to_bytes()


class ColorRoleManager(Controller):
    """Represents the colour roles controller.

    Every method sends its replies through the ``reply`` coroutine function.
    Failures that end the command are raised with a message for the user,
    failures of a single role in a batch are replied and skipped.

    Attributes
    ----------
    model: :class:`ColorRolesModel`
        The colour roles model.

    Methods
    -------
    assign_color(requester, guild, color_args, reply)
    manage_colors(requester, owner_id, guild, color_args, reply)
    stop_managing(requester, owner_id, guild, color_args, reply)
    """

    model: ColorRolesModel
    _lock: asyncio.Lock

    def __init__(self, model: ColorRolesModel) -> None:
        super().__init__(model)
        self._lock = asyncio.Lock()

    @property
    def managed_roles(self) -> ManagedRoleSet:
        """The names of the roles treated as colours."""
        return self.model.managed_roles

    @staticmethod
    def find_role(guild: Guild, name: str) -> Role | None:
        """Returns the guild role with the given name (case-insensitive)."""
        name = name.lower()
        return nextcord.utils.find(lambda r: r.name.lower() == name, guild.roles)

    @staticmethod
    def _check_is_color(role: Role, color: str, mention: str) -> None:
        if grants_authority(role.permissions):
            flags = ", ".join(authority_flags_of(role.permissions))
            Console.debug(f"Role '{role.name}' rejected as a colour ({flags})")
            raise AuthorizationError(
                f"Uh, {mention}, I think {color} is more than just a colored role."
            )

    @staticmethod
    def _check_is_owner(requester: Member, owner_id: int | None) -> None:
        if owner_id is None or requester.id != owner_id:
            raise AuthorizationError(
                f"Uh, {requester.mention}, "
                "I think you need to ask my owner for that command."
            )

    @staticmethod
    def _check_any_color(requester: Member, color_args: list[str]) -> None:
        if not color_args:
            raise ArgumentError(
                f"Uh, {requester.mention}, I think you forgot to name a color."
            )

    async def assign_color(
        self,
        requester: Member,
        guild: Guild,
        color_args: list[str],
        reply: Reply,
    ) -> None:
        """|coro|

        Gives the requester the colour role and removes the other managed roles they hold.

        Parameters
        ----------
        requester: :class:`Member`
            The member who wants the colour.
        guild: :class:`Guild`
            The guild where the command was used.
        color_args: list[:class:`str`]
            The command arguments. Exactly one colour name is expected.
        reply: Callable[[:class:`str`], Awaitable]
            Sends a message to the channel where the command was used.

        Raises
        ------
        ArgumentError
            No colour or more than one colour was given.
        NotFoundError
            There is no role with this name.
        AuthorizationError
            The role grants real power over the server.
        RemoteOperationError
            The role could not be added.
        """

        mention = requester.mention
        self._check_any_color(requester, color_args)
        if len(color_args) > 1:
            raise ArgumentError(f"Uh, {mention}, I can't give you more than one color.")

        color = color_args[0].lower()
        role = self.find_role(guild, color)
        if role is None:
            raise NotFoundError(f"Uh, {mention}, I can't find a role called {color}")
        self._check_is_color(role, color, mention)

        managed = [self.find_role(guild, name) for name in self.managed_roles.names]
        managed_ids = {r.id for r in managed if r is not None}
        roles_to_remove = [
            r for r in requester.roles if r.id in managed_ids and r.id != role.id
        ]

        for old_role in roles_to_remove:
            try:
                await requester.remove_roles(old_role, reason="Colour change")
            except nextcord.DiscordException as e:
                Console.warn(
                    f"Cannot remove '{old_role.name}' from {requester}.", exception=e
                )
                await reply(
                    f"Uh, {mention}, something went wrong. "
                    f"Are you sure I can manage {old_role.name.lower()}?"
                )

        try:
            await requester.add_roles(role, reason="Colour change")
        except nextcord.DiscordException as e:
            raise RemoteOperationError(
                f"Uh, {mention}, something went wrong. "
                f"Are you sure I can let you be {color}?"
            ) from e

        await reply(f"You got it, {mention}! You are now {color}")

    async def manage_colors(
        self,
        requester: Member,
        owner_id: int | None,
        guild: Guild,
        color_args: list[str],
        reply: Reply,
    ) -> None:
        """|coro|

        Starts treating the given roles as colours.

        Every role is checked separately. A role that is already managed,
        does not exist or grants real power is replied about and skipped.
        At the end, all managed roles are listed.

        Raises
        ------
        AuthorizationError
            The requester is not the owner.
        ArgumentError
            No colour was given.
        """

        self._check_is_owner(requester, owner_id)
        self._check_any_color(requester, color_args)
        mention = requester.mention

        async with self._lock:
            for arg in color_args:
                color = arg.lower()
                if color in self.managed_roles:
                    await reply(f"Uh, {mention}, I am already managing {color}")
                    continue

                role = self.find_role(guild, color)
                if role is None:
                    await reply(f"Uh, {mention}, I can't find a role called {color}")
                    continue

                try:
                    self._check_is_color(role, color, mention)
                except AuthorizationError as e:
                    await reply(str(e))
                    continue

                self.managed_roles.add(color)
                Console.info(f"Started managing the '{color}' role")

            await reply(self._managing_summary())

    async def stop_managing(
        self,
        requester: Member,
        owner_id: int | None,
        guild: Guild,  # pylint: disable=unused-argument
        color_args: list[str],
        reply: Reply,
    ) -> None:
        """|coro|

        Stops treating the given roles as colours.

        A role that is not managed is replied about and skipped.
        At the end, all managed roles are listed.

        Raises
        ------
        AuthorizationError
            The requester is not the owner.
        ArgumentError
            No colour was given.
        """

        self._check_is_owner(requester, owner_id)
        self._check_any_color(requester, color_args)

        async with self._lock:
            for arg in color_args:
                color = arg.lower()
                if color not in self.managed_roles:
                    await reply(f"Uh, {requester.mention}, I'm not managing {color}")
                    continue

                self.managed_roles.remove(color)
                Console.info(f"Stopped managing the '{color}' role")

            await reply(self._managing_summary())

    def _managing_summary(self) -> str:
        return (
            "Uh, I guess that means I am managing "
            f"[{', '.join(self.managed_roles.names)}] now."
        )


class ColorRolesCog(commands.Cog, name="Color"):
    """A cog handling the colour text commands."""

    __slots__ = (
        "_bot",
        "_model",
        "_ctrl",
    )

    _bot: ColorBot
    _model: ColorRolesModel
    _ctrl: ColorRoleManager

    def __init__(self, bot: ColorBot) -> None:
        """Initialize the cog and load the managed roles."""

        self._bot = bot
        self._model = ColorRolesModel()
        self._model.load_from_file()
        self._ctrl = ColorRoleManager(self._model)

    def cog_unload(self) -> None:
        self._model.save_to_file()

    @property
    def plugin_name(self) -> str:
        """The name of the plugin."""
        return self.qualified_name

    def help_text(self) -> list[str]:
        """Descriptions of the colour commands."""
        prefix = self._bot.prefix
        return [
            f"`{prefix}{COLOR_COMMAND} <color>` - "
            "assigns the desired color if it is available",
            f"`{prefix}{MANAGE_COLOR_COMMAND} <color list>` - "
            "remembers each of these roles so they can be removed "
            "when a user changes color",
            f"`{prefix}{STOP_MANAGING_COMMAND} <color list>` - "
            "stops managing the given colors",
        ]

    def stats(self) -> list[str]:
        """The plugin has no statistics."""
        return []

    def _owner_id(self, guild: Guild) -> int | None:
        if self._bot.owner_id is not None:
            return self._bot.owner_id
        return guild.owner_id

    @commands.Cog.listener(name="on_message")
    async def _on_message(self, message: Message) -> None:
        """Dispatches colour commands.

        Messages from bots and direct messages are ignored.
        """

        if message.author.bot or message.guild is None:
            return

        prefixes = [self._bot.prefix]
        if self._bot.user is not None:
            prefixes += [f"<@{self._bot.user.id}>", f"<@!{self._bot.user.id}>"]

        command = CommandUtils.parse(
            message.content,
            prefixes,
            [COLOR_COMMAND, MANAGE_COLOR_COMMAND, STOP_MANAGING_COMMAND, HELP_COMMAND],
        )
        if command is None:
            return

        handler = {
            COLOR_COMMAND: self._color_me,
            MANAGE_COLOR_COMMAND: self._manage_color,
            STOP_MANAGING_COMMAND: self._stop_managing,
            HELP_COMMAND: self._help,
        }[command.name]
        await handler(message, command)

    @MessageUtils.with_reply(
        catch_exceptions=[
            ExceptionData(ArgumentError, with_traceback_in_log=False),
            ExceptionData(NotFoundError, with_traceback_in_log=False),
            ExceptionData(AuthorizationError, with_traceback_in_log=False),
            RemoteOperationError,
        ]
    )
    @MessageUtils.with_log(show_channel=True)
    async def _color_me(self, message: Message, command: ParsedCommand) -> None:
        await self._ctrl.assign_color(
            message.author,  # type: ignore
            message.guild,  # type: ignore
            command.args,
            message.channel.send,
        )

    @MessageUtils.with_reply(
        catch_exceptions=[
            ExceptionData(ArgumentError, with_traceback_in_log=False),
            ExceptionData(AuthorizationError, with_traceback_in_log=False),
        ]
    )
    @MessageUtils.with_log()
    async def _manage_color(self, message: Message, command: ParsedCommand) -> None:
        guild: Guild = message.guild  # type: ignore
        await self._ctrl.manage_colors(
            message.author,  # type: ignore
            self._owner_id(guild),
            guild,
            command.args,
            message.channel.send,
        )
        self._model.save_to_file()

    @MessageUtils.with_reply(
        catch_exceptions=[
            ExceptionData(ArgumentError, with_traceback_in_log=False),
            ExceptionData(AuthorizationError, with_traceback_in_log=False),
        ]
    )
    @MessageUtils.with_log()
    async def _stop_managing(self, message: Message, command: ParsedCommand) -> None:
        guild: Guild = message.guild  # type: ignore
        await self._ctrl.stop_managing(
            message.author,  # type: ignore
            self._owner_id(guild),
            guild,
            command.args,
            message.channel.send,
        )
        self._model.save_to_file()

    async def _help(
        self, message: Message, command: ParsedCommand  # pylint: disable=unused-argument
    ) -> None:
        await message.channel.send("\n".join(self.help_text()))


def setup(bot: ColorBot):
    """Loads the ColorRolesCog cog."""
    bot.add_cog(ColorRolesCog(bot))
