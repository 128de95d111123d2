"""Append-only, checksum-chained log files.

Each line is written as ``TTTTTT YYYYMMDD-HHMMSS.FFF message`` where
``TTTTTT`` is a rolling checksum of the message seeded with the previous
line's token.  Editing, deleting, or reordering lines breaks the chain,
which ``verify_log_file`` detects.

Seeding:
- A new file starts from a digest of its base name and the acting user.
- An existing file continues from ``FALLBACK_SEED + last token``.  In
  ``weak`` mode the last token is whatever this process last wrote (none
  after a restart); in ``strict`` mode it is read back from the file.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Callable, Iterable
from datetime import datetime
from pathlib import Path

from pydantic import BaseModel, ConfigDict

from fanout.config import ChainMode
from fanout.core.chain_store import ChainStore
from fanout.core.hasher import (
    FALLBACK_SEED,
    checksum_token,
    continuation_seed,
    initial_seed,
)

logger = logging.getLogger(__name__)

_RECORD = re.compile(r"^(?P<token>\d{6}) (?P<stamp>\d{8}-\d{6}\.\d{3}) (?P<message>.*)$")


class LogIntegrityError(RuntimeError):
    """Raised when a chained log file fails verification."""


class LogRecord(BaseModel):
    """One parsed line of a chained log."""

    model_config = ConfigDict(frozen=True)

    token: str
    stamp: str
    message: str


class ChainReport(BaseModel):
    """Result of a successful chain verification."""

    model_config = ConfigDict(frozen=True)

    path: str
    line_count: int = 0
    continuations: int = 0  # appends to an existing file by a later invocation
    restarts: int = 0  # continuations whose predecessor token was unknown
    last_token: str | None = None


def format_stamp(when: datetime) -> str:
    """``yyyyMMdd-HHmmss.fff``"""
    return when.strftime("%Y%m%d-%H%M%S") + f".{when.microsecond // 1000:03d}"


def format_record(token: str, when: datetime, message: str) -> str:
    return f"{token} {format_stamp(when)} {message}"


def parse_record(line: str) -> LogRecord:
    """Parse one log line, raising ``LogIntegrityError`` if malformed."""
    match = _RECORD.match(line.rstrip("\r\n"))
    if match is None:
        raise LogIntegrityError(f"Malformed log line: {line!r}")
    return LogRecord(**match.groupdict())


def read_last_token(path: Path, encoding: str = "utf-8") -> str | None:
    """Token of the last well-formed line in *path*, if any."""
    last: str | None = None
    with path.open("r", encoding=encoding, errors="replace") as handle:
        for line in handle:
            match = _RECORD.match(line.rstrip("\r\n"))
            if match:
                last = match.group("token")
    return last


class ChainedLogWriter:
    """Writes checksum-chained lines to log files.

    Parameters
    ----------
    user:
        Identity folded into the seed of new log files.
    store:
        Chain state keyed by log path.  A private store is created if not
        provided.
    mode:
        ``ChainMode.WEAK`` continues existing files from the in-process
        token; ``ChainMode.STRICT`` reads the last token from disk.
    clock:
        Timestamp source, ``datetime.now`` by default.
    """

    def __init__(
        self,
        user: str,
        store: ChainStore | None = None,
        *,
        mode: ChainMode = ChainMode.WEAK,
        encoding: str = "utf-8",
        clock: Callable[[], datetime] | None = None,
    ) -> None:
        self._user = user
        self._store = store if store is not None else ChainStore()
        self._mode = mode
        self._encoding = encoding
        self._clock = clock or datetime.now

    @property
    def store(self) -> ChainStore:
        return self._store

    @property
    def mode(self) -> ChainMode:
        return self._mode

    def seed_for(self, path: str) -> str:
        """Seed for the first line of the next write to *path*."""
        target = Path(path)
        if not target.exists():
            return initial_seed(path, self._user)
        if self._mode is ChainMode.STRICT:
            return continuation_seed(read_last_token(target, self._encoding))
        return continuation_seed(self._store.last_token(path))

    def write(self, path: str, lines: Iterable[str]) -> list[str]:
        """Append *lines* to the log at *path* as chained records.

        The file is opened once, written, and closed even if a write
        fails part way.  Returns the records written, without newlines.
        """
        messages = [line.rstrip() for line in lines]
        if not messages:
            return []

        seed = self.seed_for(path)
        target = Path(path)
        target.parent.mkdir(parents=True, exist_ok=True)

        records: list[str] = []
        with target.open("a", encoding=self._encoding, newline="\n") as handle:
            for message in messages:
                token = checksum_token(message, seed)
                record = format_record(token, self._clock(), message)
                handle.write(record + "\n")
                records.append(record)
                self._store.advance(path, token)
                seed = token

        logger.debug("Chained log: wrote %d line(s) to %s", len(records), path)
        return records


def _links(record: LogRecord, seed: str) -> bool:
    return checksum_token(record.message, seed) == record.token


def verify_log_file(
    path: str | Path,
    user: str,
    *,
    name: str | None = None,
    allow_restarts: bool = True,
    encoding: str = "utf-8",
) -> ChainReport:
    """Walk a chained log and check that every line links to its predecessor.

    *name* overrides the file name used for the initial seed, for logs
    that were renamed after writing.  Returns a ``ChainReport``; raises
    ``LogIntegrityError`` on the first malformed or unlinked line.
    """
    target = Path(path)
    first_seed = initial_seed(name or target.name, user)

    previous: str | None = None
    count = continuations = restarts = 0
    with target.open("rb") as handle:
        for lineno, chunk in enumerate(handle, start=1):
            try:
                raw = chunk.decode(encoding)
            except UnicodeDecodeError as exc:
                raise LogIntegrityError(f"Line {lineno}: undecodable bytes") from exc
            if not raw.strip():
                continue
            try:
                record = parse_record(raw)
            except LogIntegrityError as exc:
                raise LogIntegrityError(f"Line {lineno}: {exc}") from exc

            if previous is None and _links(record, first_seed):
                pass
            elif previous is not None and _links(record, previous):
                pass
            elif previous is not None and _links(record, continuation_seed(previous)):
                continuations += 1
            elif allow_restarts and _links(record, FALLBACK_SEED):
                restarts += 1
            else:
                raise LogIntegrityError(
                    f"Chain broken at line {lineno} of {target}: "
                    f"token {record.token!r} does not follow "
                    f"{previous!r}"
                )

            previous = record.token
            count += 1

    return ChainReport(
        path=str(target),
        line_count=count,
        continuations=continuations,
        restarts=restarts,
        last_token=previous,
    )
