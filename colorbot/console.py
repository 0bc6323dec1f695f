# SPDX-License-Identifier: MIT
"""A module for printing information to the console.

Every printed line is also appended to the `logs/<bot_launch_date>.log` file.
Debug lines are printed only if the `COLORBOT_DEBUG` environment variable is set.

Examples
-------- ::

    from colorbot.console import Console, FontColour

    Console.info("Cog loaded")
    Console.warn("Managed roles could not be loaded", exception=e)
    Console.specific("Nick used !color me red", "COMMAND", FontColour.PINK)
"""

from __future__ import annotations

import datetime as dt
import os
import sys
import traceback
from enum import Enum
from pathlib import Path
from typing import ClassVar, NoReturn


def _debug_enabled() -> bool:
    return os.environ.get("COLORBOT_DEBUG", "").lower() in {"1", "true", "yes"}


class FontColour(Enum):
    """Colours of the text in the console."""

    GREY = "\033[30m"
    RED = "\033[31m"
    GREEN = "\033[32m"
    YELLOW = "\033[33m"
    BLUE = "\033[34m"
    PINK = "\033[35m"
    CYAN = "\033[36m"
    WHITE = "\033[37m"


class Console:
    """Prints information to the console and the log file.

    This class should not be instantiated.
    """

    _logs_directory: ClassVar[Path] = Path("logs/")
    _file_path: ClassVar[Path | None] = None
    _pending: ClassVar[list[str]] = []

    @classmethod
    def _log_file(cls) -> Path:
        if cls._file_path is None:
            cls._logs_directory.mkdir(parents=True, exist_ok=True)
            launched = str(dt.datetime.now().replace(microsecond=0))
            filename = launched.replace(" ", "_").replace(":", "-") + ".log"
            cls._file_path = cls._logs_directory / filename
        return cls._file_path

    @classmethod
    def _flush(cls) -> None:
        try:
            with open(cls._log_file(), "a", encoding="utf-8") as f:
                f.writelines(line + "\n" for line in cls._pending)
        except OSError as e:
            print(f"Cannot write to the log file: {e}", file=sys.stderr)
        cls._pending.clear()

    @classmethod
    def _print(  # pylint: disable=too-many-arguments
        cls,
        text: str,
        type_: str,
        colour: FontColour,
        *,
        bold: bool,
        exception: Exception | None = None,
    ) -> None:
        date = dt.datetime.now().strftime("%d.%m.%y %H:%M:%S")
        reset = "\033[0m"
        bold_ = "\033[1m" if bold else ""

        print(f"[{date}] {colour.value}{bold_}[{type_}]{reset} {colour.value}{text}{reset}")
        cls._pending.append(f"[{date}] <{type_}> {text}")

        if exception is not None:
            trcbck = "".join(traceback.format_exception(exception))
            print(f"{colour.value}{trcbck}{reset}", end="")
            cls._pending.append(trcbck.rstrip("\n"))

        cls._flush()

    @classmethod
    def info(cls, text: str) -> None:
        """Prints information in blue."""
        cls._print(text, "INFO", FontColour.BLUE, bold=True)

    @classmethod
    def debug(cls, text: str) -> None:
        """Prints debug information in grey, only if debugging is enabled."""
        if _debug_enabled():
            cls._print(text, "DEBUG", FontColour.GREY, bold=False)

    @classmethod
    def specific(cls, text: str, type_: str, colour: FontColour) -> None:
        """Prints information with the specified message type and colour."""
        cls._print(text, type_, colour, bold=False)

    @classmethod
    def warn(cls, text: str, *, exception: Exception | None = None) -> None:
        """Prints a warning in yellow.

        If an exception is given, its traceback is printed too.
        """
        cls._print(text, "WARN", FontColour.YELLOW, bold=True, exception=exception)

    @classmethod
    def error(cls, text: str, *, exception: Exception | None = None) -> None:
        """Prints an error in red.

        If an exception is given, its traceback is printed too.
        """
        cls._print(text, "ERROR", FontColour.RED, bold=False, exception=exception)

    @classmethod
    def critical_error(cls, text: str, exception: Exception | None = None) -> NoReturn:
        """Prints an error in red and exits the program."""
        cls._print(text, "!ERROR!", FontColour.RED, bold=True, exception=exception)
        sys.exit(1)
