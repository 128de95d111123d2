"""Destination enumeration and the fixed capability table.

Each destination carries a capability row that controls how values are
normalized and annotated before a sink sees them.  The table is fixed at
design time; callers never mutate it.
"""

from __future__ import annotations

from enum import Enum

from pydantic import BaseModel, ConfigDict


class Destination(str, Enum):
    """The eleven named sinks a value can be routed to."""

    APPEND = "Append"
    DEBUG = "Debug"
    ERROR = "Error"
    HOST = "Host"
    INFO = "Info"
    LOG = "Log"
    OUTPUT = "Output"
    REPLACE = "Replace"
    VERBOSE = "Verbose"
    WARNING = "Warning"
    XML = "Xml"


class Capability(BaseModel):
    """Per-destination formatting flags (a capability row)."""

    model_config = ConfigDict(frozen=True)

    needs_path: bool = False
    trim: bool = False
    suppress_empty: bool = False
    annotate: bool = False
    separator: bool = False


CAPABILITIES: dict[Destination, Capability] = {
    Destination.HOST: Capability(trim=True, suppress_empty=True, annotate=True, separator=True),
    Destination.APPEND: Capability(needs_path=True, separator=True),
    Destination.REPLACE: Capability(needs_path=True, separator=True),
    Destination.LOG: Capability(
        needs_path=True, trim=True, suppress_empty=True, annotate=True, separator=True
    ),
    Destination.DEBUG: Capability(trim=True, suppress_empty=True),
    Destination.ERROR: Capability(trim=True),
    Destination.WARNING: Capability(trim=True, suppress_empty=True),
    Destination.VERBOSE: Capability(trim=True, suppress_empty=True, annotate=True),
    Destination.INFO: Capability(suppress_empty=True),
    Destination.OUTPUT: Capability(),
    Destination.XML: Capability(needs_path=True),
}

# Destinations whose path is read from the PathBindings field of the same name.
PATH_FIELDS: dict[Destination, str] = {
    Destination.APPEND: "append_path",
    Destination.LOG: "log_path",
    Destination.REPLACE: "replace_path",
    Destination.XML: "xml_path",
}


def capability_for(destination: Destination) -> Capability:
    """Return the capability row for *destination*."""
    return CAPABILITIES[destination]
