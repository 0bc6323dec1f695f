"""
colorbot
--------

A Discord bot that lets members choose their colour role.

Features
--------
- self-assigning a colour role by its name
- owner-curated list of roles treated as colours
- refusing roles that grant real power over the server
"""

__title__ = "colorbot"
__license__ = "MIT"
__version__ = "1.0.0"

from . import console, errors, utils
from .color_bot import ColorBot
