# SPDX-License-Identifier: MIT
"""A module deciding whether a role is just a colour.

A role is treated as a colour only if it grants none of the
permissions that give real power over the server.

Examples
-------- ::

    from colorbot.permissions import grants_authority

    if grants_authority(role.permissions):
        raise AuthorizationError(f"{role.name} is more than just a colored role.")
"""

from __future__ import annotations

from nextcord.permissions import Permissions

AUTHORITY_FLAGS: tuple[str, ...] = (
    "kick_members",
    "ban_members",
    "administrator",
    "manage_channels",
    "manage_guild",
    "view_audit_log",
    "manage_messages",
    "mute_members",
    "deafen_members",
    "move_members",
    "manage_nicknames",
    "manage_roles",
    "manage_webhooks",
    "manage_emojis",
)
"""Names of the :class:`Permissions` flags that grant server power."""

AUTHORITY_PERMISSIONS = Permissions(**{flag: True for flag in AUTHORITY_FLAGS})
"""All authority flags combined into one :class:`Permissions` object."""


def grants_authority(permissions: Permissions | int) -> bool:
    """Whether the permissions include any of the :data:`AUTHORITY_FLAGS`.

    Parameters
    ----------
    permissions: :class:`Permissions` | :class:`int`
        The permissions of a role, or their raw value.

    Returns
    -------
    :class:`bool`
        ``True`` if the role is more than just a colour.
    """

    if isinstance(permissions, int):
        permissions = Permissions(permissions)
    return any(getattr(permissions, flag) for flag in AUTHORITY_FLAGS)


def authority_flags_of(permissions: Permissions | int) -> list[str]:
    """Returns the names of the authority flags set in the permissions."""
    if isinstance(permissions, int):
        permissions = Permissions(permissions)
    return [flag for flag in AUTHORITY_FLAGS if getattr(permissions, flag)]
