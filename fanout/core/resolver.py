"""Destination resolution — tokens to a canonical destination set.

Tokens may be full names, unambiguous case-insensitive prefixes, or a
compact string of single-letter codes (``"hol"`` → Host, Output, Log).
Unresolved tokens are not errors; they contribute nothing and produce a
diagnostic.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from fanout.logs import DIAGNOSTICS_LOGGER
from fanout.models.destinations import Destination

diagnostics = logging.getLogger(DIAGNOSTICS_LOGGER)

DEFAULT_TOKENS: tuple[str, ...] = (Destination.OUTPUT.value,)


def match_prefix(token: str) -> Destination | None:
    """Return the single destination whose name starts with *token*.

    Matching is case-insensitive.  Zero or several matches return ``None``.
    """
    needle = token.strip().lower()
    if not needle:
        return None
    matches = [d for d in Destination if d.value.lower().startswith(needle)]
    return matches[0] if len(matches) == 1 else None


def _resolve_all(tokens: Iterable[str]) -> tuple[set[Destination], list[str]]:
    resolved: set[Destination] = set()
    unresolved: list[str] = []
    for token in tokens:
        destination = match_prefix(token)
        if destination is None:
            unresolved.append(token)
        else:
            resolved.add(destination)
    return resolved, unresolved


def resolve_destinations(
    tokens: Iterable[str] | str | None,
) -> tuple[frozenset[Destination], list[str]]:
    """Resolve destination tokens into a deduplicated destination set.

    Returns the resolved set and the diagnostics produced while resolving.
    When no whole token matches and the tokens are multi-character, every
    character of the concatenated tokens is resolved as a single-letter
    code instead.
    """
    if isinstance(tokens, str):
        tokens = [tokens]
    token_list = [t for t in (tokens or []) if t is not None]
    if not token_list:
        token_list = list(DEFAULT_TOKENS)

    resolved, unresolved = _resolve_all(token_list)

    compact = "".join(t.strip() for t in token_list)
    if not resolved and len(compact) > 1:
        resolved, unresolved = _resolve_all(list(compact))

    notes = [f"Unresolved destination token {token!r}" for token in unresolved]
    for note in notes:
        diagnostics.debug(note)
    return frozenset(resolved), notes
