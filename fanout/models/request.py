"""Invocation request models — one request is one pass of the dispatcher.

Requests are frozen Pydantic models validated on construction, so a
request without values is rejected before any destination work starts.
"""

from __future__ import annotations

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class Severity(str, Enum):
    """Attention codes accepted by the annotator."""

    INFO = "I"
    WARNING = "W"
    CAUTION = "C"
    ERROR = "E"
    FATAL = "F"


class PathBindings(BaseModel):
    """Optional file targets for the path-requiring destinations.

    The same model serves for explicit per-invocation paths and for the
    ambient fallbacks injected into the dispatcher.
    """

    model_config = ConfigDict(frozen=True)

    append_path: str | None = None
    log_path: str | None = None
    replace_path: str | None = None
    xml_path: str | None = None

    def get(self, field: str) -> str | None:
        """Return the path stored under *field*, treating ``""`` as absent."""
        return getattr(self, field) or None


class InvocationRequest(BaseModel):
    """A single call to the router."""

    model_config = ConfigDict(frozen=True, arbitrary_types_allowed=True)

    values: list[Any]
    destinations: list[str] = Field(default_factory=lambda: ["Output"])
    colors: list[str] = Field(default_factory=lambda: ["default"])
    join: str | None = None
    severity: str | None = None  # one of I/W/C/E/F; anything else is diagnosed
    separator: str | None = None
    no_newline: bool = False
    paths: PathBindings = Field(default_factory=PathBindings)
    dry_run: bool = False
