"""Value normalization — arbitrary values to display-ready lines.

Every value becomes a Rendered Line Sequence for a given destination.
Suppress-empty drops zero-length lines; trim strips trailing whitespace
only, so leading indentation chosen by the caller survives.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel

from fanout.models.destinations import Capability


def to_text(value: Any) -> str:
    """Return the textual representation of *value*."""
    if value is None:
        return ""
    if isinstance(value, str):
        return value
    if isinstance(value, (bytes, bytearray)):
        return bytes(value).decode("utf-8", errors="replace")
    if isinstance(value, BaseModel):
        return value.model_dump_json(indent=2)
    if isinstance(value, Mapping):
        if not value:
            return ""
        width = max(len(str(key)) for key in value)
        return "\n".join(f"{str(key):<{width}} : {item}" for key, item in value.items())
    if isinstance(value, (list, tuple, set, frozenset)):
        return "\n".join(to_text(item) for item in value)
    return str(value)


def split_lines(text: str) -> list[str]:
    """Split on any line boundary; empty text is one empty line."""
    return text.splitlines() or [""]


def render_lines(value: Any, capability: Capability) -> list[str]:
    """Produce the Rendered Line Sequence of *value* under *capability*."""
    lines = split_lines(to_text(value))
    if capability.suppress_empty:
        lines = [line for line in lines if line]
    if capability.trim:
        lines = [line.rstrip() for line in lines]
    return lines


def is_atomic(lines: list[str]) -> bool:
    """A value is atomic when it renders to exactly one line."""
    return len(lines) == 1
