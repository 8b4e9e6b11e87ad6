#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/termdiff/segments.py
"""Character-level diff between two aligned lines.

The differ finds the longest common prefix, then the longest common suffix
of what remains, and treats the two middle spans as the diff regions. Both
are measured in whole grapheme clusters, so a base character is never
separated from its combining marks. The regions are then rebalanced so
highlighting never cuts a bracket pair in half:

- closers still owed by ``prefix + diff`` are pulled from the head of the
  suffix into the diff,
- closers sitting at the head of the suffix are pulled into the diff,
- closers shared by the tails of both diff regions are pushed back out to
  the suffixes.

Every step moves text across the diff/suffix boundary only, so
``prefix + diff + suffix`` always reproduces the input line.
"""

from __future__ import annotations

import regex

from termdiff.ansi import strip_ansi
from termdiff.models import DiffSegment
from termdiff.splitter import unmatched_closers

_CLOSER_CHARS = ")]}"
_WHITESPACE = " \t\n\r"
_GRAPHEME_RE = regex.compile(r"\X")


def diff_segment(expected: str, actual: str) -> DiffSegment:
    """Split two lines into common prefix, differing middles and suffixes.

    Parameters
    ----------
    expected : str
        Expected line
    actual : str
        Actual line

    Returns
    -------
    DiffSegment
        The split; identical lines give empty diff regions

    Examples
    --------
    >>> seg = diff_segment("f(atom())", "f(binary())")
    >>> seg.prefix, seg.expected_diff, seg.actual_diff, seg.expected_suffix
    ('f(', 'atom', 'binary', '())')

    """
    prefix = expected[: common_prefix_length(expected, actual)]
    rest_expected = expected[len(prefix) :]
    rest_actual = actual[len(prefix) :]

    suffix_len = common_suffix_length(rest_expected, rest_actual)
    expected_diff, expected_suffix = _split_tail(rest_expected, suffix_len)
    actual_diff, actual_suffix = _split_tail(rest_actual, suffix_len)

    expected_diff, expected_suffix = _rebalance(prefix, expected_diff, expected_suffix)
    actual_diff, actual_suffix = _rebalance(prefix, actual_diff, actual_suffix)

    expected_diff, actual_diff, shared = _detach_shared_closers(expected_diff, actual_diff)

    return DiffSegment(
        prefix=prefix,
        expected_diff=expected_diff,
        expected_suffix=shared + expected_suffix,
        actual_diff=actual_diff,
        actual_suffix=shared + actual_suffix,
        expected=expected,
        actual=actual,
    )


def common_prefix_length(a: str, b: str) -> int:
    """Length, in code points, of the longest common prefix of whole graphemes.

    Examples
    --------
    >>> common_prefix_length("e\\u0301x", "e\\u0300x")
    0
    >>> common_prefix_length("abc", "abd")
    2

    """
    length = 0
    for left, right in zip(graphemes(a), graphemes(b)):
        if left != right:
            break
        length += len(left)
    return length


def common_suffix_length(a: str, b: str) -> int:
    """Length, in code points, of the longest common suffix of whole graphemes."""
    length = 0
    for left, right in zip(reversed(graphemes(a)), reversed(graphemes(b))):
        if left != right:
            break
        length += len(left)
    return length


def graphemes(text: str) -> list[str]:
    """Split ``text`` into extended grapheme clusters."""
    return _GRAPHEME_RE.findall(text)


def _split_tail(text: str, count: int) -> tuple[str, str]:
    if count <= 0:
        return text, ""
    return text[:-count], text[-count:]


def _rebalance(prefix: str, diff: str, suffix: str) -> tuple[str, str]:
    closers = unmatched_closers(strip_ansi(prefix + diff))
    if closers:
        taken, suffix = _take_needed_closers(suffix, closers)
        diff += taken
    return _pull_leading_closers(diff, suffix)


def _take_needed_closers(text: str, closers: list[str]) -> tuple[str, str]:
    # Consume the owed closers in order; stop at the first one that is absent.
    taken = ""
    remaining = text
    for closer in closers:
        stripped = remaining.lstrip(_WHITESPACE)
        if not stripped.startswith(closer):
            break
        whitespace = remaining[: len(remaining) - len(stripped)]
        taken += whitespace + closer
        remaining = stripped[len(closer) :]
    return taken, remaining


def _pull_leading_closers(diff: str, suffix: str) -> tuple[str, str]:
    if not diff:
        return diff, suffix

    stripped = suffix.lstrip(_WHITESPACE)
    whitespace = suffix[: len(suffix) - len(stripped)]
    count = 0
    while count < len(stripped) and stripped[count] in _CLOSER_CHARS:
        count += 1

    if count == 0:
        return diff, suffix
    return diff + whitespace + stripped[:count], stripped[count:]


def _detach_shared_closers(expected: str, actual: str) -> tuple[str, str, str]:
    shared = ""
    while expected and actual and expected[-1] == actual[-1] and expected[-1] in _CLOSER_CHARS:
        shared = expected[-1] + shared
        expected = expected[:-1]
        actual = actual[:-1]
    return expected, actual, shared
