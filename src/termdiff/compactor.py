#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/termdiff/compactor.py
"""Collapse unchanged structure around a diff.

When two long lines differ in a single field of a struct or map, repeating
the whole structure on both sides buries the change. The compactor detects
that the diff starts inside a struct (``%Name{``) or bare map (``%{``) entry
and rewrites both sides to ``%Name{..., key => value}``.

When neither detector applies the caller keeps the full lines, but every
struct literal that does not contain the diff is shrunk to ``%Name{...}``.

Examples
--------
    >>> from termdiff.segments import diff_segment
    >>> seg = diff_segment("%Outer{:inner => %Inner{:foo => 1, :bar => 2}}",
    ...                    "%Outer{:inner => %Inner{:foo => 3, :bar => 2}}")
    >>> compact(seg)
    ('%Outer{..., :foo => 1}', '%Outer{..., :foo => 3}')

"""

from __future__ import annotations

import logging
from typing import Optional

from termdiff.constants import (
    COMPACT_ELLIPSIS,
    ENTRY_SEPARATOR,
    MAP_PREFIX,
    MAP_SUFFIX,
    STRUCT_MARKER,
    STRUCT_MARKER_RE,
    STRUCT_NAME_CHARS,
    STRUCT_PLACEHOLDER,
)
from termdiff.models import DiffSegment, Highlighter, format_entry
from termdiff.splitter import ScanState, next_token, split_key_value, tokenize, unmatched_closers, wraps_in_parens

logger = logging.getLogger(__name__)


def _plain(text: str) -> str:
    return text


def compact(segment: DiffSegment, highlight: Highlighter = _plain) -> Optional[tuple[str, str]]:
    """Collapse the context around ``segment`` into ``{..., key => value}`` form.

    The struct detector runs first, then the map detector.

    Parameters
    ----------
    segment : DiffSegment
        Segment computed over the two full lines
    highlight : callable, optional
        Applied to the diff region of each side

    Returns
    -------
    tuple[str, str] or None
        ``(compact_expected, compact_actual)``, or ``None`` when the diff does
        not start inside a keyed struct or map entry

    """
    result = _compact_struct(segment, highlight)
    if result is None:
        result = _compact_map(segment, highlight)
    if result is None:
        logger.debug("No struct or map context to compact")
    return result


def _compact_struct(segment: DiffSegment, highlight: Highlighter) -> Optional[tuple[str, str]]:
    prefix = segment.prefix
    markers = list(STRUCT_MARKER_RE.finditer(prefix))
    if not markers:
        return None

    body_start = markers[-1].end()
    if _brace_balance(prefix[markers[-1].start() :]) <= 0:
        return None

    name_match = STRUCT_MARKER_RE.search(segment.expected)
    if name_match is None:
        return None

    opener = name_match.group(0)
    return _compact_entry(segment, body_start, opener, highlight)


def _compact_map(segment: DiffSegment, highlight: Highlighter) -> Optional[tuple[str, str]]:
    prefix = segment.prefix
    index = prefix.rfind(MAP_PREFIX)
    if index == -1:
        return None
    if _brace_balance(prefix[index:]) <= 0:
        return None

    return _compact_entry(segment, index + len(MAP_PREFIX), MAP_PREFIX, highlight)


def _compact_entry(
    segment: DiffSegment,
    body_start: int,
    opener: str,
    highlight: Highlighter,
) -> Optional[tuple[str, str]]:
    # The diff must start inside the value of one entry of the innermost
    # open struct/map: key marker present, no top-level comma after it.
    entry_text = _last_top_level_piece(segment.prefix[body_start:])
    parts = split_key_value(entry_text.lstrip())
    if parts is None:
        return None
    key, _value, separator = parts

    marker_end = _value_offset(entry_text)
    if marker_end is None:
        return None
    value_head = entry_text[marker_end:].lstrip()

    wrap = wraps_in_parens(segment.expected.strip())
    lines = []
    for diff, suffix in (
        (segment.expected_diff, segment.expected_suffix),
        (segment.actual_diff, segment.actual_suffix),
    ):
        tail = _value_tail(value_head + diff, suffix)
        value = value_head + (highlight(diff) if diff else "") + tail
        line = opener + COMPACT_ELLIPSIS + format_entry(key, value, separator) + MAP_SUFFIX
        lines.append(f"({line})" if wrap else line)

    return lines[0], lines[1]


def _last_top_level_piece(body: str) -> str:
    """Text of the entry in which ``body`` ends."""
    state = ScanState()
    start = 0
    for token in tokenize(body):
        if token.kind == "char" and token.text == ENTRY_SEPARATOR and state.top_level:
            start = token.end
        state.feed(token)
    return body[start:]


def _value_offset(entry_text: str) -> Optional[int]:
    """Offset in ``entry_text`` just past its key/value separator."""
    parts = split_key_value(entry_text.lstrip())
    if parts is None:
        return None
    key, value, _separator = parts
    if not value:
        return len(entry_text)
    # The value is what trails the separator, so locate it from the end.
    index = entry_text.rfind(value)
    return index if index != -1 else None


def _value_tail(value_so_far: str, suffix: str) -> str:
    """Take text from ``suffix`` up to the end of the current entry value."""
    depth = len(unmatched_closers(value_so_far))
    state = ScanState()
    index = 0
    while index < len(suffix):
        token = next_token(suffix, index)
        if not state.quoted and state.bits == 0:
            if token.kind == "close":
                if depth == 0:
                    break
                depth -= 1
            elif token.kind == "open":
                depth += 1
            elif token.kind == "char" and token.text == ENTRY_SEPARATOR and depth == 0:
                break
        state.feed(token)
        index = token.end
    return suffix[:index].rstrip()


def _brace_balance(segment: str) -> int:
    state = ScanState()
    for token in tokenize(segment):
        state.feed(token)
    return state.brace


def shrink_structs(text: str, keep: tuple[int, int] = (0, 0)) -> tuple[str, tuple[int, int]]:
    """Replace struct literals with ``%Name{...}`` except those overlapping ``keep``.

    Parameters
    ----------
    text : str
        Plain (uncolored) line
    keep : tuple[int, int]
        ``(start, end)`` span that must stay visible; an empty span protects
        the structs enclosing its position

    Returns
    -------
    tuple[str, tuple[int, int]]
        The shrunk text and the position of ``keep`` inside it

    Examples
    --------
    >>> shrink_structs("(%Sample{:value => atom()}, atom())", (28, 34))
    ('(%Sample{...}, atom())', (15, 21))

    """
    keep_start, keep_end = keep
    out: list[str] = []
    length = 0
    new_start = new_end = None
    index = 0
    quoted = False

    while True:
        if index == keep_start and new_start is None:
            new_start = length
        if index == keep_end and new_end is None:
            new_end = length
        if index >= len(text):
            break

        char = text[index]
        if not quoted and char == STRUCT_MARKER:
            struct = _take_struct(text, index)
            if struct is not None:
                name, body_open, end = struct
                if _overlaps(index, end, keep_start, keep_end):
                    piece = text[index : body_open + 1]
                    out.append(piece)
                    length += len(piece)
                    index = body_open + 1
                else:
                    piece = STRUCT_MARKER + name + STRUCT_PLACEHOLDER
                    out.append(piece)
                    length += len(piece)
                    index = end
                continue

        if char == '"' and not _escaped(text, index):
            quoted = not quoted
        out.append(char)
        length += 1
        index += 1

    start = new_start if new_start is not None else length
    end = new_end if new_end is not None else length
    return "".join(out), (start, max(start, end))


def _take_struct(text: str, index: int) -> Optional[tuple[str, int, int]]:
    """Parse ``%Name{...}`` at ``index``; return name, brace index and end."""
    cursor = index + 1
    while cursor < len(text) and text[cursor] in STRUCT_NAME_CHARS:
        cursor += 1
    name = text[index + 1 : cursor]
    if not name or cursor >= len(text) or text[cursor] != "{":
        return None

    state = ScanState()
    position = cursor
    while position < len(text):
        token = next_token(text, position)
        state.feed(token)
        if token.kind == "close" and token.text == "}" and not state.quoted and state.brace == 0:
            return name, cursor, token.end
        position = token.end
    return None


def _overlaps(start: int, end: int, keep_start: int, keep_end: int) -> bool:
    if keep_start == keep_end:
        return start < keep_start < end
    return start < keep_end and keep_start < end


def shrink_segment(segment: DiffSegment, highlight: Highlighter = _plain) -> tuple[str, str]:
    """Render both sides of ``segment`` with non-target structs shrunk."""
    expected, (start, end) = shrink_structs(segment.expected, segment.expected_span)
    expected_line = expected[:start] + _highlight(highlight, expected[start:end]) + expected[end:]

    actual, (start, end) = shrink_structs(segment.actual, segment.actual_span)
    actual_line = actual[:start] + _highlight(highlight, actual[start:end]) + actual[end:]

    return expected_line, actual_line


def _highlight(highlight: Highlighter, text: str) -> str:
    return highlight(text) if text else ""


def _escaped(text: str, index: int) -> bool:
    backslashes = 0
    while index - backslashes > 0 and text[index - backslashes - 1] == "\\":
        backslashes += 1
    return backslashes % 2 == 1
