# SPDX-License-Identifier: MIT
"""Main module for ColorBot."""

import logging

from colorbot.color_bot import ColorBot


def main() -> None:
    """Run the bot."""
    logging.basicConfig(
        level=logging.WARN,
        format="[%(asctime)s] [%(levelname)s] %(message)s",
        datefmt="%d.%m.%y %H:%M:%S",
    )
    bot = ColorBot()
    bot.main()


if __name__ == "__main__":
    main()
