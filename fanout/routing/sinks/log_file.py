"""Log sink — hands rendered lines to the chained log writer."""

from __future__ import annotations

from fanout.core.chained_log import ChainedLogWriter
from fanout.models.destinations import Destination
from fanout.models.results import RenderedBatch
from fanout.routing.sinks._formatting import layout_lines


class LogFileSink:
    """Appends rendered lines as checksum-chained records.

    The writer owns the chain state, so every invocation routed through
    the same sink continues the same chains.
    """

    def __init__(self, writer: ChainedLogWriter) -> None:
        self._writer = writer

    @property
    def sink_name(self) -> str:
        return "chained_log"

    @property
    def destination(self) -> Destination:
        return Destination.LOG

    @property
    def writer(self) -> ChainedLogWriter:
        return self._writer

    def accept(self, batch: RenderedBatch) -> None:
        if batch.path is None:
            raise ValueError("Log requires a path")
        self._writer.write(batch.path, layout_lines(batch))
