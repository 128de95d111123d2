"""Fanout data models — request and capability models are frozen Pydantic v2."""

from fanout.models.destinations import (
    CAPABILITIES,
    PATH_FIELDS,
    Capability,
    Destination,
    capability_for,
)
from fanout.models.request import InvocationRequest, PathBindings, Severity
from fanout.models.results import (
    DispatchResult,
    RenderedBatch,
    SinkDispatchError,
)

__all__ = [
    # destinations
    "Destination",
    "Capability",
    "CAPABILITIES",
    "PATH_FIELDS",
    "capability_for",
    # request
    "InvocationRequest",
    "PathBindings",
    "Severity",
    # results
    "DispatchResult",
    "RenderedBatch",
    "SinkDispatchError",
]
