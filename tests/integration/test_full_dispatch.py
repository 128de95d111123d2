"""End-to-end integration tests — one invocation fanned out to every destination.

These tests exercise the resolver, path validation, normalizer, annotator,
every sink, and the chained log writer and verifier working together.
"""

from __future__ import annotations

import io
import logging
from pathlib import Path

import pytest
from rich.console import Console

from fanout.config import ChainMode, FanoutConfig
from fanout.core.chained_log import parse_record, verify_log_file
from fanout.logs import CHANNEL_LOGGER
from fanout.models.destinations import Destination
from fanout.models.request import InvocationRequest, PathBindings
from fanout.routing.dispatcher import OutputDispatcher
from fanout.routing.sinks.xml_file import XmlObjectSerializer

USER = "integration"


class TestFullDispatch:
    """A configured dispatcher writing to real files under tmp_path."""

    @pytest.fixture
    def console(self) -> Console:
        return Console(file=io.StringIO(), force_terminal=False, color_system=None, width=200)

    @pytest.fixture
    def settings(self, tmp_path: Path) -> FanoutConfig:
        return FanoutConfig(
            _env_file=None,
            user=USER,
            chain_mode=ChainMode.STRICT,
            append_path=str(tmp_path / "append.txt"),
            log_path=str(tmp_path / "run.log"),
            replace_path=str(tmp_path / "replace.txt"),
            xml_path=str(tmp_path / "values.xml"),
        )

    @pytest.fixture
    def dispatcher(self, settings: FanoutConfig, console: Console) -> OutputDispatcher:
        return OutputDispatcher(settings, console=console)

    def test_every_destination_serviced(
        self, dispatcher: OutputDispatcher, console: Console, tmp_path: Path, caplog
    ):
        values = ["first line\nsecond line   ", {"status": "ok"}]
        with caplog.at_level(logging.DEBUG, logger=CHANNEL_LOGGER):
            result = dispatcher.dispatch(
                InvocationRequest(
                    values=values,
                    destinations=[d.value for d in Destination],
                    severity="W",
                    separator="----",
                )
            )

        assert result.ok
        assert result.resolved == frozenset(Destination)
        assert result.output == values

        assert console.file.getvalue() == (
            "WARNING: first line\nsecond line\n----\nWARNING: status : ok\n----\n"
        )
        assert (tmp_path / "append.txt").read_text() == (
            "first line\nsecond line   \n----\nstatus : ok\n----\n"
        )
        assert (tmp_path / "replace.txt").read_text() == (tmp_path / "append.txt").read_text()

        messages = [parse_record(line).message for line in (tmp_path / "run.log").read_text().splitlines()]
        assert messages == ["WARNING: first line", "second line", "----", "status : ok", "----"]

        assert XmlObjectSerializer().load(tmp_path / "values.xml") == values

        channel_messages = [r.getMessage() for r in caplog.records if r.name == CHANNEL_LOGGER]
        assert "WARNING: first line" in channel_messages

    def test_repeated_invocations_keep_a_verifiable_chain(
        self, dispatcher: OutputDispatcher, tmp_path: Path
    ):
        for n in range(4):
            dispatcher.dispatch(InvocationRequest(values=[f"event {n}"], destinations=["Log"]))

        # A second dispatcher reads the last token back from the file.
        later = OutputDispatcher(
            FanoutConfig(_env_file=None, user=USER, chain_mode=ChainMode.STRICT),
            console=Console(file=io.StringIO()),
            ambient=PathBindings(log_path=str(tmp_path / "run.log")),
        )
        later.dispatch(InvocationRequest(values=["event 4"], destinations=["Log"]))

        report = verify_log_file(tmp_path / "run.log", USER, allow_restarts=False)
        assert report.line_count == 5
        assert report.continuations == 4
        assert report.restarts == 0

    def test_replace_keeps_only_latest(self, dispatcher: OutputDispatcher, tmp_path: Path):
        dispatcher.write(["old"], "Replace")
        dispatcher.write(["new"], "Replace")
        assert (tmp_path / "replace.txt").read_text() == "new\n"

    def test_explicit_path_overrides_ambient(self, dispatcher: OutputDispatcher, tmp_path: Path):
        explicit = tmp_path / "explicit.txt"
        dispatcher.write(["x"], "Append", append_path=str(explicit))
        assert explicit.read_text() == "x\n"
        assert not (tmp_path / "append.txt").exists()

    def test_dry_run_skips_only_xml(self, dispatcher: OutputDispatcher, tmp_path: Path):
        result = dispatcher.dispatch(
            InvocationRequest(values=["x"], destinations=["Xml", "Append"], dry_run=True)
        )
        assert set(result.delivered) == {Destination.XML, Destination.APPEND}
        assert not (tmp_path / "values.xml").exists()
        assert (tmp_path / "append.txt").exists()
