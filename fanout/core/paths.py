"""Path validation for file-backed destinations.

A syntactic sanity check only: the path must look like an absolute path
to a file with a 3-8 character extension.  Whether the target is
writable is discovered later, when the sink opens it.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Iterable

from fanout.logs import DIAGNOSTICS_LOGGER
from fanout.models.destinations import CAPABILITIES, PATH_FIELDS, Destination
from fanout.models.request import PathBindings

diagnostics = logging.getLogger(DIAGNOSTICS_LOGGER)

MIN_PATH_LENGTH = 5

_SEGMENT = r'[^\\/:*?"<>|\r\n]+'
_EXTENSION = r"\.[A-Za-z0-9]{3,8}"

# C:\folder\file.ext
_WINDOWS_PATH = re.compile(rf"^[A-Za-z]:\\(?:{_SEGMENT}\\)*{_SEGMENT}{_EXTENSION}$")
# /folder/file.ext
_POSIX_PATH = re.compile(rf"^/(?:{_SEGMENT}/)*{_SEGMENT}{_EXTENSION}$")


def is_plausible_path(path: str | None) -> bool:
    """Whether *path* passes the length and shape checks."""
    if not path or len(path) < MIN_PATH_LENGTH:
        return False
    return bool(_WINDOWS_PATH.match(path) or _POSIX_PATH.match(path))


def validate_paths(
    resolved: Iterable[Destination],
    explicit: PathBindings,
    ambient: PathBindings,
) -> tuple[frozenset[Destination], dict[Destination, str], list[str]]:
    """Drop path-requiring destinations that lack a usable path.

    The explicit per-invocation path wins; an empty or absent one falls
    back to the ambient binding of the same name.

    Returns the kept destinations, the chosen path for every kept
    file-backed destination, and the diagnostics produced.
    """
    kept: set[Destination] = set()
    paths: dict[Destination, str] = {}
    notes: list[str] = []

    for destination in resolved:
        if not CAPABILITIES[destination].needs_path:
            kept.add(destination)
            continue

        field = PATH_FIELDS[destination]
        path = explicit.get(field) or ambient.get(field)
        if is_plausible_path(path):
            kept.add(destination)
            paths[destination] = path
            continue

        if path:
            note = f"{destination.value} disabled: invalid {field} {path!r}"
        else:
            note = f"{destination.value} disabled: no {field} supplied"
        diagnostics.debug(note)
        notes.append(note)

    return frozenset(kept), paths, notes
