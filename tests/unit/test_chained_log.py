"""Tests for the chained log writer and verifier."""

from __future__ import annotations

import re
from datetime import datetime
from pathlib import Path

import pytest

from fanout.config import ChainMode
from fanout.core.chain_store import ChainStore
from fanout.core.chained_log import (
    ChainedLogWriter,
    LogIntegrityError,
    format_stamp,
    parse_record,
    read_last_token,
    verify_log_file,
)
from fanout.core.hasher import FALLBACK_SEED, checksum_token, initial_seed

TEST_USER = "tester"
FIXED_TIME = datetime(2026, 10, 17, 9, 30, 15, 123000)

LINE_PATTERN = re.compile(r"^[0-9]{6} \d{8}-\d{6}\.\d{3} .*$")


def _lines(path: Path) -> list[str]:
    return path.read_text(encoding="utf-8").splitlines()


class TestFormatting:
    def test_stamp_millisecond_precision(self):
        assert format_stamp(datetime(2026, 1, 2, 3, 4, 5, 678901)) == "20260102-030405.678"

    def test_parse_record(self):
        record = parse_record("012345 20261017-093015.123 Hello World\n")
        assert record.token == "012345"
        assert record.stamp == "20261017-093015.123"
        assert record.message == "Hello World"

    def test_parse_malformed(self):
        with pytest.raises(LogIntegrityError, match="Malformed"):
            parse_record("not a log line")


class TestChainedLogWriter:
    def test_new_file_created_with_one_line(self, tmp_dir: Path, log_writer: ChainedLogWriter):
        path = tmp_dir / "run.log"
        log_writer.write(str(path), ["Hello World"])

        lines = _lines(path)
        assert len(lines) == 1
        assert re.match(r"^[0-9]{6} \d{8}-\d{6}\.\d{3} Hello World$", lines[0])

    def test_first_line_seeded_from_name_and_user(self, tmp_dir: Path, log_writer: ChainedLogWriter):
        path = tmp_dir / "run.log"
        records = log_writer.write(str(path), ["Hello World"])

        expected = checksum_token("Hello World", initial_seed(str(path), TEST_USER))
        assert records[0].startswith(expected + " ")
        assert records[0] == f"{expected} 20261017-093015.123 Hello World"

    def test_lines_chain_within_one_write(self, tmp_dir: Path, log_writer: ChainedLogWriter):
        path = tmp_dir / "run.log"
        records = log_writer.write(str(path), ["one", "two", "three"])

        tokens = [parse_record(r).token for r in records]
        assert tokens[1] == checksum_token("two", tokens[0])
        assert tokens[2] == checksum_token("three", tokens[1])

    def test_message_trailing_whitespace_trimmed(self, tmp_dir: Path, log_writer: ChainedLogWriter):
        path = tmp_dir / "run.log"
        log_writer.write(str(path), ["  indented   "])
        assert parse_record(_lines(path)[0]).message == "  indented"

    def test_empty_write_creates_nothing(self, tmp_dir: Path, log_writer: ChainedLogWriter):
        path = tmp_dir / "run.log"
        assert log_writer.write(str(path), []) == []
        assert not path.exists()

    def test_store_tracks_last_token(self, tmp_dir: Path, log_writer: ChainedLogWriter):
        path = str(tmp_dir / "run.log")
        records = log_writer.write(path, ["one", "two"])
        assert log_writer.store.last_token(path) == parse_record(records[-1]).token

    def test_existing_file_continues_from_fallback_plus_token(
        self, tmp_dir: Path, log_writer: ChainedLogWriter
    ):
        path = str(tmp_dir / "run.log")
        first = log_writer.write(path, ["one"])
        second = log_writer.write(path, ["two"])

        previous = parse_record(first[0]).token
        assert parse_record(second[0]).token == checksum_token("two", FALLBACK_SEED + previous)

    def test_weak_mode_restarts_after_process_restart(self, tmp_dir: Path):
        path = str(tmp_dir / "run.log")
        ChainedLogWriter(TEST_USER, clock=lambda: FIXED_TIME).write(path, ["one"])

        fresh = ChainedLogWriter(TEST_USER, ChainStore(), clock=lambda: FIXED_TIME)
        records = fresh.write(path, ["two"])
        assert parse_record(records[0]).token == checksum_token("two", FALLBACK_SEED)

    def test_strict_mode_reads_last_token_from_file(self, tmp_dir: Path):
        path = str(tmp_dir / "run.log")
        first = ChainedLogWriter(TEST_USER, clock=lambda: FIXED_TIME).write(path, ["one", "two"])

        fresh = ChainedLogWriter(TEST_USER, ChainStore(), mode=ChainMode.STRICT)
        records = fresh.write(path, ["three"])

        previous = parse_record(first[-1]).token
        assert parse_record(records[0]).token == checksum_token("three", FALLBACK_SEED + previous)

    def test_read_last_token(self, tmp_dir: Path, log_writer: ChainedLogWriter):
        path = tmp_dir / "run.log"
        records = log_writer.write(str(path), ["a", "b"])
        assert read_last_token(path) == parse_record(records[-1]).token

    def test_every_line_matches_format(self, tmp_dir: Path, log_writer: ChainedLogWriter):
        path = tmp_dir / "run.log"
        log_writer.write(str(path), ["a", "b c", "INFO:    d"])
        assert all(LINE_PATTERN.match(line) for line in _lines(path))


class TestVerifyLogFile:
    def test_single_write_verifies(self, tmp_dir: Path, log_writer: ChainedLogWriter):
        path = tmp_dir / "run.log"
        log_writer.write(str(path), ["one", "two", "three"])

        report = verify_log_file(path, TEST_USER)
        assert report.line_count == 3
        assert report.continuations == 0
        assert report.restarts == 0

    def test_continuations_verify(self, tmp_dir: Path, log_writer: ChainedLogWriter):
        path = tmp_dir / "run.log"
        for message in ["one", "two", "three"]:
            log_writer.write(str(path), [message])

        report = verify_log_file(path, TEST_USER)
        assert report.line_count == 3
        assert report.continuations == 2

    def test_weak_restart_tolerated_by_default(self, tmp_dir: Path):
        path = tmp_dir / "run.log"
        ChainedLogWriter(TEST_USER).write(str(path), ["one"])
        ChainedLogWriter(TEST_USER).write(str(path), ["two"])

        report = verify_log_file(path, TEST_USER)
        assert report.restarts == 1

        with pytest.raises(LogIntegrityError, match="Chain broken at line 2"):
            verify_log_file(path, TEST_USER, allow_restarts=False)

    def test_strict_restart_verifies_fully(self, tmp_dir: Path):
        path = tmp_dir / "run.log"
        ChainedLogWriter(TEST_USER, mode=ChainMode.STRICT).write(str(path), ["one"])
        ChainedLogWriter(TEST_USER, mode=ChainMode.STRICT).write(str(path), ["two"])

        report = verify_log_file(path, TEST_USER, allow_restarts=False)
        assert report.continuations == 1

    def test_wrong_user_fails(self, tmp_dir: Path, log_writer: ChainedLogWriter):
        path = tmp_dir / "run.log"
        log_writer.write(str(path), ["one"])
        with pytest.raises(LogIntegrityError):
            verify_log_file(path, "someone-else", allow_restarts=False)

    def test_renamed_file_needs_original_name(self, tmp_dir: Path, log_writer: ChainedLogWriter):
        path = tmp_dir / "run.log"
        log_writer.write(str(path), ["one"])
        moved = path.rename(tmp_dir / "archived.log")

        with pytest.raises(LogIntegrityError):
            verify_log_file(moved, TEST_USER, allow_restarts=False)
        assert verify_log_file(moved, TEST_USER, name="run.log").line_count == 1


class TestChainStore:
    def test_advance_and_forget(self, tmp_dir: Path):
        store = ChainStore()
        path = str(tmp_dir / "run.log")
        store.advance(path, "123456")
        assert path in store
        assert len(store) == 1
        assert store.last_token(path) == "123456"

        store.forget(path)
        assert path not in store
        assert store.last_token(path) is None

    def test_windows_paths_case_insensitive(self):
        store = ChainStore()
        store.advance(r"C:\Logs\Run.log", "000001")
        assert store.last_token(r"c:\logs\run.LOG") == "000001"

    def test_relative_and_absolute_share_a_key(self, tmp_dir: Path, monkeypatch):
        monkeypatch.chdir(tmp_dir)
        store = ChainStore()
        store.advance("run.log", "000002")
        assert store.last_token(str(tmp_dir / "run.log")) == "000002"
