"""Rolling checksum helpers for the chained log.

Tokens are short numeric strings, not cryptographic digests: they make a
log tamper-evident against casual edits, reordering, and deletion.
"""

from __future__ import annotations

from pathlib import PurePath, PureWindowsPath

TOKEN_LENGTH = 6

# Prefix used when continuing a log file that already exists.
FALLBACK_SEED = "100"


def weighted_byte_sum(text: str) -> int:
    """Sum of each UTF-8 byte multiplied by its 1-based position."""
    return sum(position * byte for position, byte in enumerate(text.encode("utf-8"), start=1))


def checksum_token(text: str, seed: str) -> str:
    """Return the 6-character chain token of *text* under *seed*.

    A pure function: identical inputs always give the same token, and the
    seed shifts the result so that each token depends on its predecessor.
    """
    total = int(seed or "0") + weighted_byte_sum(text)
    return str(total).zfill(TOKEN_LENGTH)[:TOKEN_LENGTH]


def name_digest(name: str) -> str:
    """Deterministic 3-digit digest of a file or user name."""
    return str(weighted_byte_sum(name) % 1000).zfill(3)


def base_name(path: str) -> str:
    """File name component of *path*, for both Windows and POSIX paths."""
    if "\\" in path:
        return PureWindowsPath(path).name
    return PurePath(path).name


def initial_seed(path: str, user: str) -> str:
    """Seed for the first line of a brand-new log file."""
    return name_digest(base_name(path)) + name_digest(user)


def continuation_seed(last_token: str | None) -> str:
    """Seed for the first line written to an existing log file."""
    return FALLBACK_SEED + (last_token or "")
