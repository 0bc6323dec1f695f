# pylint: disable=all

from __future__ import annotations

from dataclasses import dataclass, field

from nextcord.errors import DiscordException
from nextcord.permissions import Permissions


@dataclass
class RoleMock:
    name: str
    id: int
    permissions: Permissions = field(default_factory=Permissions.none)

    @property
    def mention(self) -> str:
        return f"<@&{self.id}>"


class DefaultRole(RoleMock):
    def __init__(self) -> None:
        super().__init__("@everyone", 0, Permissions.none())


class GuildMock:
    default_role: RoleMock
    roles: list[RoleMock]
    members: set[MemberMock]
    owner_id: int | None

    def __init__(self, owner_id: int | None = None) -> None:
        self.default_role = DefaultRole()
        self.roles = [self.default_role]
        self.members = set()
        self.owner_id = owner_id

    def get_role(self, role_id: int) -> RoleMock | None:
        for role in self.roles:
            if role.id == role_id:
                return role


@dataclass
class MemberMock:
    name: str
    id: int
    roles: list[RoleMock]
    nick: str | None = None
    discriminator: str | None = None
    bot: bool = False
    failing_role_ids: set[int] = field(default_factory=set)
    _guild: GuildMock | None = None

    def __post_init__(self) -> None:
        if self._guild is not None:
            self._guild.members.add(self)

    def __str__(self) -> str:
        if self.discriminator:
            return f"{self.name}#{self.discriminator}"
        return self.name

    def __hash__(self) -> int:
        return self.id

    @property
    def mention(self) -> str:
        return f"<@{self.id}>"

    @property
    def display_name(self) -> str:
        return self.nick or self.name

    @property
    def guild(self) -> GuildMock | None:
        return self._guild

    async def remove_roles(self, *roles, reason: str | None = None) -> None:
        for role in roles:
            if role.id in self.failing_role_ids:
                raise DiscordException("Missing Permissions")
            self.roles.remove(role)

    async def add_roles(self, *roles, reason: str | None = None) -> None:
        for role in roles:
            if role.id in self.failing_role_ids:
                raise DiscordException("Missing Permissions")
            if role not in self.roles:
                self.roles.append(role)

    def __repr__(self) -> str:
        return f"<MemberMock name='{self.name}' id={self.id}>"


class ChannelMock:
    name: str
    sent: list[str]

    def __init__(self, name: str = "general") -> None:
        self.name = name
        self.sent = []

    async def send(self, content: str) -> None:
        self.sent.append(content)


@dataclass
class MessageMock:
    content: str
    author: MemberMock
    guild: GuildMock | None
    channel: ChannelMock = field(default_factory=ChannelMock)


@dataclass
class UserMock:
    id: int


@dataclass
class BotMock:
    prefix: str = "!"
    owner_id: int | None = None
    user: UserMock | None = field(default_factory=lambda: UserMock(999))
