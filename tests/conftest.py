"""Shared test fixtures for fanout."""

from __future__ import annotations

import io
import logging
from collections.abc import Callable
from datetime import datetime
from pathlib import Path
from typing import Any

import pytest
from rich.console import Console

from fanout.config import ChainMode, FanoutConfig
from fanout.core.chain_store import ChainStore
from fanout.core.chained_log import ChainedLogWriter
from fanout.models.request import InvocationRequest, PathBindings
from fanout.routing.dispatcher import OutputDispatcher

TEST_USER = "tester"
FIXED_TIME = datetime(2026, 10, 17, 9, 30, 15, 123000)


@pytest.fixture(autouse=True)
def _restore_fanout_logger():
    """Undo logging configuration done by CLI invocations."""
    root = logging.getLogger("fanout")
    handlers, level = list(root.handlers), root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def tmp_dir(tmp_path: Path) -> Path:
    """Provide a temporary directory for test artifacts."""
    return tmp_path


@pytest.fixture
def settings() -> FanoutConfig:
    """Configuration isolated from the environment and any .env file."""
    return FanoutConfig(_env_file=None, user=TEST_USER, log_level="DEBUG")


@pytest.fixture
def chain_store() -> ChainStore:
    return ChainStore()


@pytest.fixture
def log_writer(chain_store: ChainStore) -> ChainedLogWriter:
    """A weak-mode writer with a fixed clock."""
    return ChainedLogWriter(TEST_USER, chain_store, mode=ChainMode.WEAK, clock=lambda: FIXED_TIME)


@pytest.fixture
def console() -> Console:
    """A plain-text console capturing everything printed to it."""
    return Console(file=io.StringIO(), force_terminal=False, color_system=None, width=200)


@pytest.fixture
def host_output(console: Console) -> Callable[[], str]:
    """Return what has been printed to the test console so far."""

    def _read() -> str:
        return console.file.getvalue()

    return _read


@pytest.fixture
def dispatcher(
    settings: FanoutConfig, console: Console, log_writer: ChainedLogWriter
) -> OutputDispatcher:
    """A dispatcher with no ambient paths, a capturing console, and a fixed clock."""
    return OutputDispatcher(
        settings,
        console=console,
        ambient=PathBindings(),
        log_writer=log_writer,
    )


@pytest.fixture
def make_request() -> Callable[..., InvocationRequest]:
    """Factory fixture: build an InvocationRequest with sensible defaults."""

    def _factory(
        values: list[Any] | None = None,
        destinations: list[str] | None = None,
        **overrides: Any,
    ) -> InvocationRequest:
        defaults: dict[str, Any] = {
            "values": values if values is not None else ["Hello World"],
            "destinations": destinations if destinations is not None else ["Output"],
        }
        defaults.update(overrides)
        return InvocationRequest(**defaults)

    return _factory
