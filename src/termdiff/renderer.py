#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/termdiff/renderer.py
"""Turn one deleted or inserted line into printable, prefixed output.

Long values are reflowed for reading: a value wrapped in parentheses is
split recursively and re-wrapped, and a map literal with more than one entry
is laid out one entry per line with nested maps indented a further level.
Everything else stays on one line.

Color escapes already present in the text are lifted out before reflowing.
Layout decisions are made on the plain text only; each escape keeps the
plain-text offset it sat at and is written back at that position once the
physical lines are known. A highlight that crosses a line break is closed at
the end of the line and reopened on the next one. Stripping escapes from the
colored rendering therefore gives exactly the plain rendering.
"""

from __future__ import annotations

from typing import NamedTuple, Optional

from termdiff.ansi import colorize, split_escapes
from termdiff.constants import (
    ANSI_RESET,
    DEFAULT_DEL_COLOR,
    DEFAULT_INS_COLOR,
    DIFF_PREFIX_DEL,
    DIFF_PREFIX_INS,
    ENTRY_SEPARATOR,
    INDENT,
    MAP_PREFIX,
    DiffKind,
)
from termdiff.mapentries import is_map_literal
from termdiff.splitter import split_key_value, split_top_level, wraps_in_parens

Span = tuple[int, int]


class PhysicalLine(NamedTuple):
    """Layout of one output line: indentation plus slices of the plain text."""

    indent: str
    spans: list[Span]


def marker_for(kind: DiffKind) -> str:
    """Return the diff marker printed before the first line of ``kind``."""
    if kind == "del":
        return DIFF_PREFIX_DEL
    if kind == "ins":
        return DIFF_PREFIX_INS
    raise ValueError(f"Unknown diff kind {kind!r}; expected 'del' or 'ins'")


def render(kind: DiffKind, text: str, color: bool = False, color_name: Optional[str] = None) -> list[str]:
    """Render one diff line as a list of physical lines.

    Parameters
    ----------
    kind : {"del", "ins"}
        Whether the line was removed from the expected side or added on the
        actual side
    text : str
        Line text, possibly carrying highlight escapes
    color : bool, default False
        Tint each physical line with the line color
    color_name : str, optional
        Line color; defaults to red for deletions and green for insertions

    Returns
    -------
    list[str]
        The first line starts with ``"- "`` or ``"+ "``, continuation lines
        with blanks of the same width

    Examples
    --------
    >>> render("del", "%{:a => 1, :b => 2}")
    ['- %{', '    :a => 1,', '    :b => 2', '  }']
    >>> render("ins", "(atom())")
    ['+ (atom())']

    """
    marker = marker_for(kind)
    if color_name is None:
        color_name = DEFAULT_DEL_COLOR if kind == "del" else DEFAULT_INS_COLOR

    plain, escapes = split_escapes(text)
    layout = reflow(plain)
    lines = _serialize(plain, escapes, layout)

    continuation = " " * len(marker)
    rendered = []
    for index, line in enumerate(lines):
        lead = marker if index == 0 else continuation
        rendered.append(colorize(lead + line, color_name, color))
    return rendered


def reflow(plain: str) -> list[PhysicalLine]:
    """Lay ``plain`` out over one or more physical lines.

    Parameters
    ----------
    plain : str
        Line text without escapes

    Returns
    -------
    list[PhysicalLine]
        At least one line; the spans of all lines, in order, select a
        subsequence of ``plain`` that only omits whitespace

    """
    return _reflow_range(plain, 0, len(plain), level=0)


def _reflow_range(plain: str, start: int, end: int, level: int) -> list[PhysicalLine]:
    start, end = _trim(plain, start, end)
    text = plain[start:end]

    if len(text) >= 2 and wraps_in_parens(text):
        inner = _reflow_range(plain, start + 1, end - 1, level)
        first, last = inner[0], inner[-1]
        if len(inner) == 1:
            return [PhysicalLine(first.indent, [(start, start + 1), *first.spans, (end - 1, end)])]
        return [
            PhysicalLine(first.indent, [(start, start + 1), *first.spans]),
            *inner[1:-1],
            PhysicalLine(last.indent, [*last.spans, (end - 1, end)]),
        ]

    if is_map_literal(text):
        return _map_lines(plain, start, end, level)

    return [PhysicalLine(INDENT * level, [(start, end)] if start < end else [])]


def _map_lines(plain: str, start: int, end: int, level: int) -> list[PhysicalLine]:
    """One line per entry for a map with more than one entry."""
    indent = INDENT * level
    body_start = start + len(MAP_PREFIX)
    body_end = end - 1

    entries: list[tuple[int, int, Optional[int]]] = []
    cursor = body_start
    for piece in split_top_level(plain[body_start:body_end], ENTRY_SEPARATOR):
        piece_end = cursor + len(piece)
        comma = piece_end if piece_end < body_end else None
        entry_start, entry_end = _trim(plain, cursor, piece_end)
        if entry_start < entry_end:
            entries.append((entry_start, entry_end, comma))
        cursor = piece_end + len(ENTRY_SEPARATOR)

    if len(entries) <= 1:
        return [PhysicalLine(indent, [(start, end)])]

    lines = [PhysicalLine(indent, [(start, body_start)])]
    last = len(entries) - 1
    for index, (entry_start, entry_end, comma) in enumerate(entries):
        entry_lines = _entry_lines(plain, entry_start, entry_end, level + 1)
        if index < last and comma is not None:
            tail = entry_lines[-1]
            entry_lines[-1] = PhysicalLine(tail.indent, [*tail.spans, (comma, comma + 1)])
        lines.extend(entry_lines)
    lines.append(PhysicalLine(indent, [(body_end, end)]))
    return lines


def _entry_lines(plain: str, start: int, end: int, level: int) -> list[PhysicalLine]:
    indent = INDENT * level
    parts = split_key_value(plain[start:end])
    if parts is not None:
        value = parts[1]
        value_start = end - len(value)
        if value and is_map_literal(value):
            nested = _map_lines(plain, value_start, end, level)
            head = nested[0]
            return [PhysicalLine(indent, [(start, value_start), *head.spans]), *nested[1:]]
    return [PhysicalLine(indent, [(start, end)])]


def _trim(plain: str, start: int, end: int) -> Span:
    while start < end and plain[start].isspace():
        start += 1
    while end > start and plain[end - 1].isspace():
        end -= 1
    return start, end


def _serialize(plain: str, escapes: list[tuple[int, str]], layout: list[PhysicalLine]) -> list[str]:
    """Write the laid-out lines back out with escapes at their offsets."""
    pending = list(reversed(escapes))
    active = ""
    lines: list[str] = []

    def emit_through(offset: int, out: list[str]) -> None:
        nonlocal active
        while pending and pending[-1][0] <= offset:
            code = pending.pop()[1]
            out.append(code)
            active = "" if code == ANSI_RESET else code

    for number, line in enumerate(layout):
        out = [line.indent]
        if active:
            out.append(active)
        line_end = None
        for span_start, span_end in line.spans:
            for offset in range(span_start, span_end):
                emit_through(offset, out)
                out.append(plain[offset])
            line_end = span_end

        if number == len(layout) - 1:
            emit_through(len(plain), out)
        else:
            if line_end is not None:
                emit_through(line_end, out)
            if active:
                out.append(ANSI_RESET)
        lines.append("".join(out))

    return lines
