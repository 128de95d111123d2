"""Append and Replace sinks — plain text files, one rendered line per line.

Append opens the target in append-create mode, Replace in
truncate-create mode.  A separator line follows each value's lines when
the request carries one.
"""

from __future__ import annotations

import logging
from pathlib import Path

from fanout.models.destinations import Destination
from fanout.models.results import RenderedBatch
from fanout.routing.sinks._formatting import layout_lines

logger = logging.getLogger(__name__)

_MODES: dict[Destination, str] = {
    Destination.APPEND: "a",
    Destination.REPLACE: "w",
}


class TextFileSink:
    """Writes rendered lines to a text file.

    Parameters
    ----------
    destination:
        ``Destination.APPEND`` or ``Destination.REPLACE``.
    encoding:
        Text encoding for the target file.
    """

    def __init__(self, destination: Destination, encoding: str = "utf-8") -> None:
        if destination not in _MODES:
            raise ValueError(f"TextFileSink cannot service {destination.value}")
        self._destination = destination
        self._encoding = encoding

    @property
    def sink_name(self) -> str:
        return f"{self._destination.value.lower()}_file"

    @property
    def destination(self) -> Destination:
        return self._destination

    def accept(self, batch: RenderedBatch) -> None:
        if batch.path is None:
            raise ValueError(f"{self._destination.value} requires a path")

        lines = layout_lines(batch, join=True)
        if batch.request.no_newline:
            payload = "".join(lines) + "\n" if lines else ""
        else:
            payload = "".join(line + "\n" for line in lines)

        target = Path(batch.path)
        target.parent.mkdir(parents=True, exist_ok=True)
        with target.open(_MODES[self._destination], encoding=self._encoding, newline="\n") as handle:
            handle.write(payload)

        logger.debug(
            "%s: wrote %d line(s) to %s", self.sink_name, len(lines), target
        )
