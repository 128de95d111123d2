"""Host sink — renders values to the terminal with Rich.

Colors cycle per value (``colors[i % len(colors)]``).  Console color
names (``Green``, ``DarkYellow``, ...) map onto Rich's standard palette;
anything else is taken as a Rich style string.  With ``no_newline`` the
segments print back to back and one line break closes the whole batch.
"""

from __future__ import annotations

import logging

from pydantic import BaseModel, ConfigDict
from rich.console import Console
from rich.errors import StyleSyntaxError
from rich.style import Style
from rich.text import Text

from fanout.logs import DIAGNOSTICS_LOGGER
from fanout.models.destinations import Destination
from fanout.models.results import RenderedBatch
from fanout.routing.sinks._formatting import join_group, separator_of

diagnostics = logging.getLogger(DIAGNOSTICS_LOGGER)

DEFAULT_STYLE = "default"

# Console color names -> Rich standard colors
_CONSOLE_COLORS: dict[str, str] = {
    "black": "black",
    "darkblue": "blue",
    "darkgreen": "green",
    "darkcyan": "cyan",
    "darkred": "red",
    "darkmagenta": "magenta",
    "darkyellow": "yellow",
    "gray": "white",
    "darkgray": "bright_black",
    "blue": "bright_blue",
    "green": "bright_green",
    "cyan": "bright_cyan",
    "red": "bright_red",
    "magenta": "bright_magenta",
    "yellow": "bright_yellow",
    "white": "bright_white",
}


class HostSegment(BaseModel):
    """One printed fragment: text, Rich style, and line terminator."""

    model_config = ConfigDict(frozen=True)

    text: str
    style: str = DEFAULT_STYLE
    end: str = "\n"


def _rich_style(color: str) -> str | None:
    style = _CONSOLE_COLORS.get(color.strip().lower(), color.strip())
    try:
        Style.parse(style)
    except StyleSyntaxError:
        return None
    return style


def console_style(color: str | None, default: str = DEFAULT_STYLE) -> str:
    """Map a color name to a valid Rich style, falling back to *default*."""
    if not color:
        return default
    return _rich_style(color) or default


def color_diagnostics(colors: list[str]) -> list[str]:
    """One note per distinct color that is not a usable style."""
    notes: list[str] = []
    for color in dict.fromkeys(colors):
        if color and _rich_style(color) is None:
            note = f"Unknown host color {color!r}; using the default style"
            diagnostics.debug(note)
            notes.append(note)
    return notes


def color_for(index: int, colors: list[str]) -> str | None:
    """Color of the value at *index*; colors cycle rather than clamp."""
    if not colors:
        return None
    return colors[index % len(colors)]


def plan_segments(batch: RenderedBatch, default: str = DEFAULT_STYLE) -> list[HostSegment]:
    """Lay out the batch as the ordered list of segments to print."""
    request = batch.request
    end = "" if request.no_newline else "\n"
    separator = separator_of(batch)

    segments: list[HostSegment] = []
    for index, group in enumerate(batch.groups):
        style = console_style(color_for(index, request.colors), default)
        for line in join_group(group, request.join):
            segments.append(HostSegment(text=line, style=style, end=end))
        if separator is not None:
            segments.append(HostSegment(text=separator, style=default, end=end))

    if request.no_newline and segments:
        segments.append(HostSegment(text="", style=default, end="\n"))
    return segments


class HostSink:
    """Prints rendered values to a Rich console.

    Parameters
    ----------
    console:
        Rich Console instance.  A new one is created if not provided.
    default_style:
        Style for separators and for values whose color is unusable.
    """

    def __init__(self, console: Console | None = None, default_style: str = DEFAULT_STYLE) -> None:
        self.console = console or Console()
        self._default = console_style(default_style)

    @property
    def sink_name(self) -> str:
        return "host"

    @property
    def destination(self) -> Destination:
        return Destination.HOST

    def accept(self, batch: RenderedBatch) -> None:
        for segment in plan_segments(batch, self._default):
            self.console.print(
                Text(segment.text, style=segment.style),
                end=segment.end,
                soft_wrap=True,
                highlight=False,
            )
