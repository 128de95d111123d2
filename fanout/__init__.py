"""Fanout: multiplexed output router with checksum-chained log files.

Routes a batch of values to any mix of destinations (terminal, text
files, chained logs, logging channels, XML) in one call, and hands the
values back unchanged when ``Output`` is requested.
"""

__version__ = "0.1.0"
__description__ = "Multiplexed output router with checksum-chained log files"

from fanout.models.destinations import Destination
from fanout.models.request import InvocationRequest, PathBindings, Severity
from fanout.routing.dispatcher import OutputDispatcher, write_out
from fanout.cli.app import app as cli

__all__ = [
    "Destination",
    "InvocationRequest",
    "OutputDispatcher",
    "PathBindings",
    "Severity",
    "cli",
    "write_out",
    "__version__",
]
