"""OutputDispatcher — routes one invocation's values to every requested destination.

One invocation is one pass: resolve destination tokens, check the
severity code, validate file paths, then for each destination normalize
and annotate the values and hand the batch to that destination's sink.
Configuration problems become diagnostics.  A sink failure is recorded
against its destination and never stops the others.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Mapping
from typing import Any

from pydantic import BaseModel
from rich.console import Console

from fanout.config import FanoutConfig
from fanout.config import config as default_config
from fanout.core.annotator import annotate, severity_label
from fanout.core.chained_log import ChainedLogWriter
from fanout.core.normalizer import render_lines
from fanout.core.paths import validate_paths
from fanout.core.resolver import resolve_destinations
from fanout.models.destinations import CAPABILITIES, Destination
from fanout.models.request import InvocationRequest, PathBindings
from fanout.models.results import DispatchResult, RenderedBatch
from fanout.routing.sinks import BaseSink
from fanout.routing.sinks.channel import CHANNEL_LEVELS, ChannelSink
from fanout.routing.sinks.host import HostSink, color_diagnostics
from fanout.routing.sinks.log_file import LogFileSink
from fanout.routing.sinks.text_file import TextFileSink
from fanout.routing.sinks.xml_file import ObjectSerializer, XmlFileSink

logger = logging.getLogger(__name__)

_ORDER: dict[Destination, int] = {d: i for i, d in enumerate(Destination)}


class OutputDispatcher:
    """Routes values to the destinations named by each request.

    Parameters
    ----------
    settings:
        Configuration supplying ambient paths, chain mode, and the acting
        user.  Defaults to the module-level ``config``.
    console:
        Rich Console for the Host destination.
    ambient:
        Fallback file paths.  Overrides ``settings.ambient_paths()``.
    log_writer:
        Chained log writer; one is built from *settings* if not given.
    serializer:
        Object serializer for the Xml destination.

    Usage
    -----
    >>> dispatcher = OutputDispatcher()
    >>> result = dispatcher.dispatch(InvocationRequest(values=["hi"], destinations=["ho"]))
    >>> result.output
    """

    def __init__(
        self,
        settings: FanoutConfig | None = None,
        *,
        console: Console | None = None,
        ambient: PathBindings | None = None,
        log_writer: ChainedLogWriter | None = None,
        serializer: ObjectSerializer | None = None,
    ) -> None:
        self._settings = settings or default_config
        self._ambient = ambient if ambient is not None else self._settings.ambient_paths()
        writer = log_writer or ChainedLogWriter(
            self._settings.acting_user(),
            mode=self._settings.chain_mode,
            encoding=self._settings.encoding,
        )

        self._sinks: dict[Destination, BaseSink] = {}
        self.register_sink(HostSink(console, default_style=self._settings.default_color))
        self.register_sink(TextFileSink(Destination.APPEND, self._settings.encoding))
        self.register_sink(TextFileSink(Destination.REPLACE, self._settings.encoding))
        self.register_sink(LogFileSink(writer))
        self.register_sink(XmlFileSink(serializer))
        for channel in CHANNEL_LEVELS:
            self.register_sink(ChannelSink(channel))

    # ------------------------------------------------------------------
    # Sink management
    # ------------------------------------------------------------------

    def register_sink(self, sink: BaseSink) -> None:
        """Install *sink* for its destination, replacing any previous one."""
        self._sinks[sink.destination] = sink
        logger.debug("Registered sink %s for %s", sink.sink_name, sink.destination.value)

    @property
    def sinks(self) -> dict[Destination, BaseSink]:
        """Return a copy of the destination -> sink mapping."""
        return dict(self._sinks)

    @property
    def ambient(self) -> PathBindings:
        return self._ambient

    # ------------------------------------------------------------------
    # Rendering
    # ------------------------------------------------------------------

    def render(
        self,
        destination: Destination,
        request: InvocationRequest,
        label: str | None = None,
        path: str | None = None,
    ) -> RenderedBatch:
        """Normalize and annotate the request's values for *destination*."""
        capability = CAPABILITIES[destination]
        groups = [render_lines(value, capability) for value in request.values]
        if capability.annotate:
            groups = annotate(groups, label, per_object=destination is Destination.HOST)
        return RenderedBatch(
            destination=destination,
            values=request.values,
            groups=groups,
            request=request,
            path=path,
        )

    # ------------------------------------------------------------------
    # Dispatch
    # ------------------------------------------------------------------

    def dispatch(self, request: InvocationRequest) -> DispatchResult:
        """Run one invocation and report what happened.

        Returns a ``DispatchResult`` whose ``output`` holds the untouched
        values when ``Output`` was requested.  Never raises for
        configuration problems or sink failures; see ``failed`` and
        ``diagnostics``.
        """
        result = DispatchResult()

        resolved, notes = resolve_destinations(request.destinations)
        result.diagnostics.extend(notes)

        label, note = severity_label(request.severity)
        if note:
            result.diagnostics.append(note)

        kept, paths, notes = validate_paths(resolved, request.paths, self._ambient)
        result.diagnostics.extend(notes)
        result.resolved = kept
        if Destination.HOST in kept:
            result.diagnostics.extend(color_diagnostics(request.colors))

        for destination in sorted(kept, key=_ORDER.__getitem__):
            if destination is Destination.OUTPUT:
                result.output = list(request.values)
                result.delivered.append(destination)
                continue

            sink = self._sinks.get(destination)
            if sink is None:
                note = f"No sink registered for {destination.value}"
                logger.warning(note)
                result.diagnostics.append(note)
                continue

            try:
                sink.accept(self.render(destination, request, label, paths.get(destination)))
                result.delivered.append(destination)
            except Exception as exc:  # noqa: BLE001
                logger.error("Sink %s failed: %s", sink.sink_name, exc)
                result.failed[destination] = str(exc)

        if result.failed:
            logger.warning(
                "%d/%d destinations succeeded, %d failed",
                len(result.delivered),
                len(kept),
                len(result.failed),
            )
        return result

    def write(
        self,
        values: Iterable[Any],
        destinations: Iterable[str] | str | None = None,
        **options: Any,
    ) -> list[Any]:
        """Build a request from arguments, dispatch it, and return ``output``.

        A single string, bytes, mapping or model is one value, not a
        sequence to unpack.
        ``append_path``, ``log_path``, ``replace_path`` and ``xml_path``
        may be passed directly instead of a ``paths`` model.
        """
        if values is None:
            raise ValueError("values must not be None")
        if isinstance(values, (str, bytes, bytearray, Mapping, BaseModel)):
            values = [values]
        if isinstance(destinations, str):
            destinations = [destinations]

        path_options = {
            name: options.pop(name)
            for name in list(options)
            if name in PathBindings.model_fields
        }
        if path_options:
            options["paths"] = PathBindings(**path_options)

        request = InvocationRequest(
            values=list(values),
            destinations=list(destinations) if destinations is not None else ["Output"],
            **options,
        )
        return self.dispatch(request).output


_default_dispatcher: OutputDispatcher | None = None


def get_dispatcher() -> OutputDispatcher:
    """Return the process-wide dispatcher, creating it on first use."""
    global _default_dispatcher
    if _default_dispatcher is None:
        _default_dispatcher = OutputDispatcher()
    return _default_dispatcher


def write_out(
    values: Iterable[Any],
    destinations: Iterable[str] | str | None = None,
    **options: Any,
) -> list[Any]:
    """Route *values* through the process-wide dispatcher.

    >>> write_out(["a", "b"], "ho", colors=["Green"])
    """
    return get_dispatcher().write(values, destinations, **options)
