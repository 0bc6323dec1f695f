# SPDX-License-Identifier: MIT
"""A module containing all custom exceptions."""


from dataclasses import dataclass, field
from typing import Type


class ColorBotError(Exception):
    """Base exception for all ColorBot exceptions."""


class ArgumentError(ColorBotError):
    """Wrong number of command arguments."""


class NotFoundError(ColorBotError):
    """The role name doesn't resolve to a role in the guild."""


class AuthorizationError(ColorBotError):
    """The caller is not the owner or the role grants real server power."""


class RemoteOperationError(ColorBotError):
    """Discord refused to add or remove a role."""


class DeserializationError(ColorBotError):
    """The persisted state is malformed."""


class SerializationError(ColorBotError):
    """The state cannot be serialized."""


class InvalidSettingsFile(ColorBotError):
    """Invalid settings file."""


@dataclass
class ExceptionData:
    """Exception data with attributes to be passed to the error handler.

    Attributes
    ----------
    type: Type[Exception]
        Exception type.
    with_traceback_in_log: bool = True
        Whether to include traceback in log.
        Defaults to ``True``.

    Examples
    -------- ::

        @MessageUtils.with_reply(catch_exceptions=[
            ExceptionData(ArgumentError, with_traceback_in_log=False)
        ])
        async def _color_me(self, message, args) -> None:
            ...
    """

    type: Type[Exception]
    with_traceback_in_log: bool = field(default=True, kw_only=True)
