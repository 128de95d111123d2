"""Sink protocol for fanout destinations.

Every sink services exactly one ``Destination``.  The dispatcher builds a
``RenderedBatch`` (values already normalized and annotated for that
destination) and hands it to the sink's ``accept`` method.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from fanout.models.destinations import Destination
from fanout.models.results import RenderedBatch


@runtime_checkable
class BaseSink(Protocol):
    """Protocol that every fanout sink must implement.

    Attributes
    ----------
    sink_name : str
        A human-readable identifier (e.g. ``"host"``, ``"chained_log"``).
    destination : Destination
        The destination this sink services.
    """

    @property
    def sink_name(self) -> str:
        """Return the name of this sink."""
        ...

    @property
    def destination(self) -> Destination:
        """Return the destination this sink services."""
        ...

    def accept(self, batch: RenderedBatch) -> None:
        """Deliver one invocation's rendered values.

        Write failures propagate; the dispatcher records them against
        this destination and continues with the others.
        """
        ...
