#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/termdiff/engine.py
"""Line diff engine.

Chooses a strategy for two normalized term renderings and produces the
rendered deleted and inserted lines.

Strategies, in order:

1. Identical inputs produce nothing.
2. Two single-line map literals are aligned by key. Only differing keys are
   reported, one delete and one insert per differing key.
3. Two single-line signatures ``(args) :: return`` are compared on their
   argument and return parts separately.
4. Otherwise a Myers line diff. A run of deleted lines directly followed by
   a run of inserted lines is paired up positionally and each pair gets a
   character-level highlight, compacted to the differing field when the
   difference sits inside a struct or map entry.

The engine never raises for malformed term text; every failure falls back to
the next strategy.

Examples
--------
    >>> from termdiff.models import flatten_lines
    >>> flatten_lines(diff_lines(["%{:a => 1, :b => 2}"], ["%{:a => 1, :b => 3}"]))
    ['- :b => 2', '+ :b => 3']

"""

from __future__ import annotations

import logging
from typing import Any, Optional, Sequence

from termdiff.compactor import compact, shrink_segment
from termdiff.constants import MAP_PREFIX, MAP_SUFFIX, SPEC_RETURN_SEPARATOR, DiffKind
from termdiff.exceptions import NotAMapError
from termdiff.mapentries import align, is_map_literal, maps_equivalent, parse_map
from termdiff.models import AlignedRow, DiffOp, RenderedLine, format_entry
from termdiff.myers import myers_runs
from termdiff.normalize import normalize, render_binaries
from termdiff.options import DiffOptions
from termdiff.pretty import PrettyPrinter, load_pretty_printer
from termdiff.renderer import render
from termdiff.segments import diff_segment
from termdiff.splitter import take_outer_paren

logger = logging.getLogger(__name__)


class _Context:
    """Rendering settings resolved once per diff call."""

    def __init__(self, options: DiffOptions):
        self.options = options
        self.highlight = options.highlight

    def line(self, kind: DiffKind, text: str) -> RenderedLine:
        color_name = self.options.del_color if kind == "del" else self.options.ins_color
        return RenderedLine(kind, tuple(render(kind, text, self.options.color, color_name)))

    def pair(self, expected: str, actual: str) -> list[RenderedLine]:
        return [self.line("del", expected), self.line("ins", actual)]


def diff_lines(
    expected_lines: Sequence[str] | str,
    actual_lines: Sequence[str] | str,
    options: Optional[DiffOptions] = None,
    **overrides: Any,
) -> list[RenderedLine]:
    """Diff two normalized line sequences.

    Parameters
    ----------
    expected_lines : sequence of str or str
        Expected rendering, one logical line per item; a string is split
        into lines
    actual_lines : sequence of str or str
        Actual rendering
    options : DiffOptions, optional
        Rendering options; defaults to ``DiffOptions()``
    **overrides
        Option fields to override for this call, e.g. ``color=True``

    Returns
    -------
    list[RenderedLine]
        Deleted and inserted lines in display order; empty when the inputs
        are identical

    """
    expected = _as_lines(expected_lines)
    actual = _as_lines(actual_lines)

    options = options or DiffOptions()
    if overrides:
        options = options.create_updated(**overrides)

    if expected == actual:
        return []

    context = _Context(options)

    if len(expected) == 1 and len(actual) == 1:
        try:
            return _diff_maps(expected[0], actual[0], context)
        except NotAMapError as e:
            logger.debug(f"Map alignment not applicable, trying signature split: {e.reason}")

        rendered = _diff_signatures(expected[0], actual[0], context)
        if rendered is not None:
            return rendered
        logger.debug("Signature split not applicable, falling back to line diff")

    return _diff_myers(expected, actual, context)


diff = diff_lines


def diff_terms(
    expected_raw: Any,
    actual_raw: Any,
    options: Optional[DiffOptions] = None,
    pretty_printer: Optional[PrettyPrinter] = None,
    **overrides: Any,
) -> list[RenderedLine]:
    """Normalize two raw term values and diff them.

    Parameters
    ----------
    expected_raw : Any
        Expected value: text, bytes, a list of text chunks, or ``None``
    actual_raw : Any
        Actual value
    options : DiffOptions, optional
        Rendering options; ``options.pretty_printer`` is loaded when no
        ``pretty_printer`` is passed
    pretty_printer : callable, optional
        Reformats each raw value before it is split into lines
    **overrides
        Option fields to override for this call

    Returns
    -------
    list[RenderedLine]
        See :func:`diff_lines`

    """
    options = options or DiffOptions()
    if overrides:
        options = options.create_updated(**overrides)

    if pretty_printer is None and options.pretty_printer:
        pretty_printer = load_pretty_printer(options.pretty_printer)

    expected = normalize(expected_raw, pretty_printer)
    actual = normalize(actual_raw, pretty_printer)
    return diff_lines(expected, actual, options)


def _as_lines(lines: Sequence[str] | str) -> list[str]:
    if isinstance(lines, str):
        return lines.splitlines()
    return list(lines)


# ---------------------------------------------------------------------------
# Map alignment
# ---------------------------------------------------------------------------


def _diff_maps(expected: str, actual: str, context: _Context) -> list[RenderedLine]:
    """Report differing keys of two map literals.

    Raises
    ------
    NotAMapError
        If either line is not a map literal

    """
    rendered: list[RenderedLine] = []
    for row in align(expected, actual):
        rendered.extend(_diff_row(row, context))
    return rendered


def _diff_row(row: AlignedRow, context: _Context) -> list[RenderedLine]:
    highlight = context.highlight
    # Literal rewriting runs before highlighting so escapes never split a
    # byte-list literal.
    key = render_binaries(row.key)
    expected = render_binaries(row.expected) if row.expected is not None else None
    actual = render_binaries(row.actual) if row.actual is not None else None

    if expected is None and actual is None:
        return []
    if actual is None:
        return [context.line("del", highlight(format_entry(key, expected, row.separator)))]
    if expected is None:
        return [context.line("ins", highlight(format_entry(key, actual, row.separator)))]
    if expected.strip() == actual.strip():
        return []

    if is_map_literal(expected) and is_map_literal(actual):
        if maps_equivalent(expected, actual):
            return []
        expected_value = render_map_value(expected, actual, context)
        actual_value = render_map_value(actual, expected, context)
    else:
        segment = diff_segment(expected, actual)
        expected_value = segment.expected_line(highlight)
        actual_value = segment.actual_line(highlight)

    return context.pair(
        format_entry(key, expected_value, row.separator),
        format_entry(key, actual_value, row.separator),
    )


def render_map_value(value: str, other: str, context: _Context) -> str:
    """Render one side of a nested map with its differences highlighted.

    Entries missing from ``other`` are highlighted whole, nested maps on both
    sides recurse, and other differing values get a character-level
    highlight.

    Parameters
    ----------
    value : str
        Map literal of the side being rendered
    other : str
        Map literal of the opposite side

    Returns
    -------
    str
        Single-line map literal carrying highlight escapes

    """
    highlight = context.highlight
    try:
        own_entries = parse_map(value)
        other_entries = {entry.key: entry.value for entry in parse_map(other)}
    except NotAMapError:
        return diff_segment(value, other).expected_line(highlight)

    parts = []
    for entry in own_entries:
        other_value = other_entries.get(entry.key)
        if other_value is None:
            parts.append(highlight(entry.to_text()))
        elif maps_equivalent(entry.value, other_value):
            parts.append(entry.to_text())
        elif is_map_literal(entry.value) and is_map_literal(other_value):
            parts.append(format_entry(entry.key, render_map_value(entry.value, other_value, context), entry.separator))
        else:
            segment = diff_segment(entry.value, other_value)
            parts.append(format_entry(entry.key, segment.expected_line(highlight), entry.separator))

    return MAP_PREFIX + ", ".join(parts) + MAP_SUFFIX


# ---------------------------------------------------------------------------
# Signature lines
# ---------------------------------------------------------------------------


def split_signature(line: str) -> Optional[tuple[str, str]]:
    """Split ``(args) :: return`` into its argument and return parts.

    Examples
    --------
    >>> split_signature("(integer()) :: atom()")
    ('integer()', 'atom()')
    >>> split_signature("atom()") is None
    True

    """
    outer = take_outer_paren(line.strip())
    if outer is None:
        return None
    args, rest = outer
    rest = rest.strip()
    if not rest.startswith(SPEC_RETURN_SEPARATOR):
        return None
    return args.strip(), rest[len(SPEC_RETURN_SEPARATOR) :].strip()


def _diff_signatures(expected: str, actual: str, context: _Context) -> Optional[list[RenderedLine]]:
    expected_parts = split_signature(expected)
    actual_parts = split_signature(actual)
    if expected_parts is None or actual_parts is None:
        return None

    highlight = context.highlight
    args = diff_segment(expected_parts[0], actual_parts[0])
    returns = diff_segment(expected_parts[1], actual_parts[1])

    def join(args_text: str, return_text: str) -> str:
        return f"({args_text}) {SPEC_RETURN_SEPARATOR} {return_text}"

    return context.pair(
        join(args.expected_line(highlight), returns.expected_line(highlight)),
        join(args.actual_line(highlight), returns.actual_line(highlight)),
    )


# ---------------------------------------------------------------------------
# Myers fallback
# ---------------------------------------------------------------------------


def diff_ops(expected: Sequence[str], actual: Sequence[str]) -> list[DiffOp]:
    """Line-level edit script with adjacent delete/insert runs paired.

    A delete run immediately followed by an insert run is paired line by line
    up to the shorter run; the surplus lines of the longer run follow as plain
    deletes or inserts.

    Parameters
    ----------
    expected : sequence of str
        Expected lines
    actual : sequence of str
        Actual lines

    Returns
    -------
    list[DiffOp]
        Operations in display order, including ``equal`` ones

    Examples
    --------
    >>> [op.tag for op in diff_ops(["a", "b", "c"], ["a", "x", "y", "c"])]
    ['equal', 'paired', 'insert', 'equal']

    """
    runs = myers_runs(list(expected), list(actual))
    ops: list[DiffOp] = []
    index = 0

    while index < len(runs):
        tag, items = runs[index]

        if tag == "equal":
            ops.extend(DiffOp("equal", item, item) for item in items)
            index += 1
            continue

        if tag == "delete" and index + 1 < len(runs) and runs[index + 1][0] == "insert":
            inserts = runs[index + 1][1]
            count = min(len(items), len(inserts))
            ops.extend(DiffOp("paired", old, new) for old, new in zip(items[:count], inserts[:count]))
            ops.extend(DiffOp("delete", expected=old) for old in items[count:])
            ops.extend(DiffOp("insert", actual=new) for new in inserts[count:])
            index += 2
            continue

        if tag == "delete":
            ops.extend(DiffOp("delete", expected=item) for item in items)
        else:
            ops.extend(DiffOp("insert", actual=item) for item in items)
        index += 1

    return ops


def _diff_myers(expected: list[str], actual: list[str], context: _Context) -> list[RenderedLine]:
    rendered: list[RenderedLine] = []
    for op in diff_ops(expected, actual):
        if op.tag == "paired":
            rendered.extend(_diff_pair(op.expected or "", op.actual or "", context))
        elif op.tag == "delete":
            rendered.append(context.line("del", op.expected or ""))
        elif op.tag == "insert":
            rendered.append(context.line("ins", op.actual or ""))
    return rendered


def _diff_pair(expected: str, actual: str, context: _Context) -> list[RenderedLine]:
    segment = diff_segment(expected, actual)
    if segment.identical:
        return []

    compacted = compact(segment, context.highlight)
    if compacted is None:
        compacted = shrink_segment(segment, context.highlight)
    return context.pair(*compacted)
