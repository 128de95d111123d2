"""Dispatch results and the per-sink rendered batch."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from fanout.models.destinations import Destination
from fanout.models.request import InvocationRequest


class SinkDispatchError(RuntimeError):
    """Raised on request when one or more destinations failed to write."""


class RenderedBatch(BaseModel):
    """Everything a sink needs for one destination of one invocation.

    ``groups`` holds one Rendered Line Sequence per input value, already
    normalized and annotated for ``destination``.  ``values`` are the raw,
    untouched inputs for sinks that serialize objects verbatim.
    """

    model_config = ConfigDict(frozen=True)

    destination: Destination
    values: list[Any]
    groups: list[list[str]]
    request: InvocationRequest
    path: str | None = None


class DispatchResult(BaseModel):
    """Outcome of one invocation.

    ``output`` carries the untouched values when ``Output`` was requested
    and is empty otherwise.  Write failures never abort the invocation;
    they are recorded in ``failed`` instead.
    """

    output: list[Any] = Field(default_factory=list)
    resolved: frozenset[Destination] = frozenset()
    delivered: list[Destination] = Field(default_factory=list)
    failed: dict[Destination, str] = Field(default_factory=dict)
    diagnostics: list[str] = Field(default_factory=list)

    @property
    def ok(self) -> bool:
        """Whether every resolved destination was serviced."""
        return not self.failed

    def raise_for_failures(self) -> None:
        """Raise ``SinkDispatchError`` if any destination failed."""
        if self.failed:
            raise SinkDispatchError(
                f"{len(self.failed)} destination(s) failed: "
                + "; ".join(f"{d.value}: {msg}" for d, msg in self.failed.items())
            )
