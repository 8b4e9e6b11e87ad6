#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/termdiff/mapentries.py
"""Parse single-line map literals and align two of them by key.

A map literal is ``%{k1 => v1, k2 => v2}`` (keyword keys ``%{k1: v1}`` are
accepted too), optionally wrapped in one layer of parentheses. Entries are
split on top-level commas, so nested maps, lists, tuples and byte-list
literals stay intact. A bare ``...`` entry is dropped.

Parsing failures raise :class:`~termdiff.exceptions.NotAMapError`, which the
line diff engine catches to fall back to a plain line diff.

Examples
--------
    >>> [e.key for e in parse_map("%{:a => 1, :b => %{:c => 2}}")]
    [':a', ':b']
    >>> [(r.key, r.expected, r.actual) for r in align("%{:a => 1}", "%{:b => 2}")]
    [(':a', '1', None), (':b', None, '2')]

"""

from __future__ import annotations

import logging

from termdiff.constants import CONTINUATION_MARKER, ENTRY_SEPARATOR, MAP_PREFIX, MAP_SUFFIX
from termdiff.exceptions import NotAMapError
from termdiff.models import AlignedRow, MapEntry
from termdiff.splitter import ScanState, split_key_value, split_top_level, tokenize, wraps_in_parens

logger = logging.getLogger(__name__)


def is_map_literal(text: str) -> bool:
    """Whether ``text`` is a single map literal.

    The text must start with the map opener and the brace it opens must be
    closed by the final character, so ``%{:a => 1}, %{:b => 2}`` is not one
    map.
    """
    if not (text.startswith(MAP_PREFIX) and text.endswith(MAP_SUFFIX)):
        return False

    state = ScanState()
    for token in tokenize(text):
        state.feed(token)
        if token.kind == "close" and state.top_level:
            return token.end == len(text)
    return False


def map_inner_text(text: str) -> str:
    """Return the text between the map markers.

    One layer of surrounding parentheses is unwrapped first.

    Raises
    ------
    NotAMapError
        If the trimmed text is not a map literal

    """
    trimmed = text.strip()

    if not is_map_literal(trimmed) and wraps_in_parens(trimmed):
        trimmed = trimmed[1:-1].strip()

    if not is_map_literal(trimmed):
        raise NotAMapError(text)

    return trimmed[len(MAP_PREFIX) : len(trimmed) - len(MAP_SUFFIX)].strip()


def split_entries(inner: str) -> list[str]:
    """Split the inside of a map on top-level commas, dropping blanks and ``...``."""
    entries = (piece.strip() for piece in split_top_level(inner, ENTRY_SEPARATOR))
    return [entry for entry in entries if entry and entry != CONTINUATION_MARKER]


def parse_map(text: str) -> list[MapEntry]:
    """Parse one nesting level of a map literal into ordered entries.

    Order is first-seen order; a repeated key keeps its first position and
    its last value.

    Parameters
    ----------
    text : str
        Map literal text, possibly wrapped in parentheses

    Returns
    -------
    list[MapEntry]
        Entries with trimmed keys and values

    Raises
    ------
    NotAMapError
        If ``text`` is not a map literal or an entry has no key/value
        separator

    """
    inner = map_inner_text(text)

    entries: dict[str, MapEntry] = {}
    for raw_entry in split_entries(inner):
        parts = split_key_value(raw_entry)
        if parts is None:
            raise NotAMapError(text, reason=f"entry without key/value separator {raw_entry!r}")
        key, value, separator = parts
        entries[key] = MapEntry(key=key, value=value, separator=separator)

    return list(entries.values())


def format_map(entries: list[MapEntry]) -> str:
    """Join entries back into a single-line map literal."""
    return MAP_PREFIX + ", ".join(entry.to_text() for entry in entries) + MAP_SUFFIX


def align(expected_text: str, actual_text: str) -> list[AlignedRow]:
    """Align two map literals by key.

    Rows follow the expected map's key order, then keys only present in the
    actual map in their own order.

    Parameters
    ----------
    expected_text : str
        Expected map literal
    actual_text : str
        Actual map literal

    Returns
    -------
    list[AlignedRow]
        One row per distinct key

    Raises
    ------
    NotAMapError
        If either side is not a map literal

    """
    expected = {entry.key: entry for entry in parse_map(expected_text)}
    actual = {entry.key: entry for entry in parse_map(actual_text)}

    keys = list(expected) + [key for key in actual if key not in expected]

    rows: list[AlignedRow] = []
    for key in keys:
        expected_entry = expected.get(key)
        actual_entry = actual.get(key)
        separator = (expected_entry or actual_entry).separator  # type: ignore[union-attr]
        rows.append(
            AlignedRow(
                key=key,
                expected=expected_entry.value if expected_entry is not None else None,
                actual=actual_entry.value if actual_entry is not None else None,
                separator=separator,
            )
        )

    logger.debug(f"Aligned {len(expected)} expected and {len(actual)} actual map entries into {len(rows)} rows")
    return rows


def maps_equivalent(expected_text: str, actual_text: str) -> bool:
    """Whether two map literals hold the same entries.

    Key order and spacing are ignored at every nesting level.

    Examples
    --------
    >>> maps_equivalent("%{:a => 1, :b => %{:c => 2}}", "%{:b => %{ :c => 2 }, :a => 1}")
    True
    >>> maps_equivalent("%{:a => 1}", "%{:a => 2}")
    False

    """
    try:
        rows = align(expected_text, actual_text)
    except NotAMapError:
        return False

    for row in rows:
        if row.expected is None or row.actual is None:
            return False
        if row.expected.strip() == row.actual.strip():
            continue
        if not (is_map_literal(row.expected) and is_map_literal(row.actual)):
            return False
        if not maps_equivalent(row.expected, row.actual):
            return False
    return True
