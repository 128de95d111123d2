"""Logging setup for fanout.

Adds a VERBOSE level between DEBUG and INFO for the Verbose channel and
provides a Rich-backed handler for command line use.  Library code only
ever calls ``logging.getLogger(__name__)``; handlers are the caller's
business unless ``configure_logging`` is invoked.
"""

from __future__ import annotations

import logging
from typing import Final

from rich.console import Console
from rich.logging import RichHandler

VERBOSE: Final[int] = 15

if logging.getLevelName(VERBOSE) != "VERBOSE":
    logging.addLevelName(VERBOSE, "VERBOSE")

# Functional channel destinations log here.
CHANNEL_LOGGER = "fanout.channel"
# Non-fatal configuration problems log here, never on a functional destination.
DIAGNOSTICS_LOGGER = "fanout.diagnostics"


def resolve_level(level: str | int) -> int:
    """Turn ``"DEBUG"``, ``"verbose"``, ``"10"`` or ``10`` into a level number."""
    if isinstance(level, int):
        return level
    value = level.strip().upper()
    if value.isdigit():
        return int(value)
    resolved = logging.getLevelName(value)
    return resolved if isinstance(resolved, int) else logging.WARNING


def configure_logging(level: str | int = "WARNING", console: Console | None = None) -> None:
    """Install a single RichHandler on the ``fanout`` logger."""
    root = logging.getLogger("fanout")
    for handler in list(root.handlers):
        if isinstance(handler, RichHandler):
            root.removeHandler(handler)
    handler = RichHandler(
        console=console or Console(stderr=True),
        show_path=False,
        markup=False,
        rich_tracebacks=True,
    )
    handler.setFormatter(logging.Formatter("%(name)s: %(message)s"))
    root.addHandler(handler)
    root.setLevel(resolve_level(level))
