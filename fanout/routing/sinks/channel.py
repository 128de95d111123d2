"""Channel sinks — forward rendered lines to the logging subsystem.

Each line is logged individually on the ``fanout.channel`` logger at the
level matching the channel.  Handlers, formatting, and filtering are the
logging configuration's concern.
"""

from __future__ import annotations

import logging

from fanout.logs import CHANNEL_LOGGER, VERBOSE
from fanout.models.destinations import Destination
from fanout.models.results import RenderedBatch

CHANNEL_LEVELS: dict[Destination, int] = {
    Destination.DEBUG: logging.DEBUG,
    Destination.VERBOSE: VERBOSE,
    Destination.INFO: logging.INFO,
    Destination.WARNING: logging.WARNING,
    Destination.ERROR: logging.ERROR,
}


class ChannelSink:
    """Logs each rendered line at the channel's level."""

    def __init__(self, destination: Destination, logger: logging.Logger | None = None) -> None:
        if destination not in CHANNEL_LEVELS:
            raise ValueError(f"{destination.value} is not a logging channel")
        self._destination = destination
        self._level = CHANNEL_LEVELS[destination]
        self._logger = logger or logging.getLogger(CHANNEL_LOGGER)

    @property
    def sink_name(self) -> str:
        return f"{self._destination.value.lower()}_channel"

    @property
    def destination(self) -> Destination:
        return self._destination

    def accept(self, batch: RenderedBatch) -> None:
        for group in batch.groups:
            for line in group:
                self._logger.log(self._level, "%s", line)
