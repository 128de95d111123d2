"""Attention annotation — fixed-width severity labels."""

from __future__ import annotations

import logging

from fanout.core.normalizer import is_atomic
from fanout.logs import DIAGNOSTICS_LOGGER
from fanout.models.request import Severity

diagnostics = logging.getLogger(DIAGNOSTICS_LOGGER)

SEVERITY_LABELS: dict[Severity, str] = {
    Severity.INFO: "INFO:    ",
    Severity.WARNING: "WARNING: ",
    Severity.CAUTION: "CAUTION: ",
    Severity.ERROR: "ERROR:   ",
    Severity.FATAL: "FATAL:   ",
}


def severity_label(code: str | None) -> tuple[str | None, str | None]:
    """Map a severity code to its label.

    Returns ``(label, diagnostic)``; both are ``None`` when no code was
    given.  An unknown code yields no label and a diagnostic.
    """
    if code is None or code == "":
        return None, None
    try:
        return SEVERITY_LABELS[Severity(code.strip().upper())], None
    except ValueError:
        note = f"Unrecognized severity code {code!r}; no annotation applied"
        diagnostics.debug(note)
        return None, note


def annotate(groups: list[list[str]], label: str | None, *, per_object: bool = False) -> list[list[str]]:
    """Prepend *label* to the leading line of the first non-empty group.

    With ``per_object`` the label also marks the leading line of every
    atomic (single-line) group.  Input groups are not mutated.
    """
    if not label:
        return groups

    annotated = [list(group) for group in groups]
    first = next((i for i, group in enumerate(annotated) if group), None)
    for i, group in enumerate(annotated):
        if i == first or (per_object and is_atomic(group)):
            group[0] = label + group[0]
    return annotated
