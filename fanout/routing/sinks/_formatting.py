"""Shared line-layout helpers for the text-producing sinks."""

from __future__ import annotations

from fanout.models.destinations import CAPABILITIES
from fanout.models.results import RenderedBatch


def join_group(group: list[str], join: str | None) -> list[str]:
    """Collapse a multi-line group into one line when *join* is given."""
    if join is not None and len(group) > 1:
        return [join.join(group)]
    return group


def separator_of(batch: RenderedBatch) -> str | None:
    """The separator line for *batch*, or ``None`` if none applies."""
    if not CAPABILITIES[batch.destination].separator:
        return None
    separator = batch.request.separator
    return separator if separator else None


def layout_lines(batch: RenderedBatch, *, join: bool = False) -> list[str]:
    """Flatten the batch's groups, adding a separator after each value.

    Values whose group rendered empty still get their separator so the
    number of separators always matches the number of values.
    """
    separator = separator_of(batch)
    lines: list[str] = []
    for group in batch.groups:
        lines.extend(join_group(group, batch.request.join) if join else group)
        if separator is not None:
            lines.append(separator)
    return lines
