"""Explicit store of chain state keyed by log path.

One entry per resolved log path holds the token of the most recently
written line.  The store lives as long as its owner (normally one
``ChainedLogWriter``); a fresh process starts empty.

There is no locking.  Concurrent writers to the same path from several
threads or processes race on both the token and the file; callers that
need that must serialize writes per path themselves.
"""

from __future__ import annotations

import os


def path_key(path: str) -> str:
    """Normalize *path* into a store key."""
    if "\\" in path:
        return path.lower()
    return os.path.abspath(path)


class ChainStore:
    """Mapping from log path to the last token written to it."""

    def __init__(self) -> None:
        self._tokens: dict[str, str] = {}

    def last_token(self, path: str) -> str | None:
        return self._tokens.get(path_key(path))

    def advance(self, path: str, token: str) -> None:
        self._tokens[path_key(path)] = token

    def forget(self, path: str) -> None:
        self._tokens.pop(path_key(path), None)

    def __contains__(self, path: object) -> bool:
        return isinstance(path, str) and path_key(path) in self._tokens

    def __len__(self) -> int:
        return len(self._tokens)
