#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/termdiff/models.py
"""Data models shared by the diff pipeline.

All models are small immutable dataclasses. They are created fresh for every
diff call and carry no references back into the engine.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Iterable, Optional

from termdiff.constants import KEY_VALUE_SEPARATOR, KEYWORD_SEPARATOR, DiffKind, DiffTag

Highlighter = Callable[[str], str]


def _plain(text: str) -> str:
    return text


def format_entry(key: str, value: str, separator: str = KEY_VALUE_SEPARATOR) -> str:
    """Join a key and value with the separator style they were parsed with.

    Parameters
    ----------
    key : str
        Entry key as it appeared in the term text
    value : str
        Entry value
    separator : str, default "=>"
        ``"=>"`` for arrow entries, ``":"`` for keyword entries

    Returns
    -------
    str
        ``"key => value"`` or ``"key: value"``

    """
    if separator == KEYWORD_SEPARATOR:
        return f"{key}: {value}"
    return f"{key} {KEY_VALUE_SEPARATOR} {value}"


@dataclass(frozen=True, slots=True)
class MapEntry:
    """A single key/value pair from one nesting level of a map literal."""

    key: str
    value: str
    separator: str = KEY_VALUE_SEPARATOR

    def to_text(self) -> str:
        return format_entry(self.key, self.value, self.separator)


@dataclass(frozen=True, slots=True)
class AlignedRow:
    """One key of two aligned maps; either side may be missing."""

    key: str
    expected: Optional[str]
    actual: Optional[str]
    separator: str = KEY_VALUE_SEPARATOR


@dataclass(frozen=True, slots=True)
class DiffSegment:
    """Character-level split of two aligned lines.

    ``prefix + expected_diff + expected_suffix`` always equals ``expected``,
    and symmetrically for the actual side. Only the ``*_diff`` regions differ.

    Parameters
    ----------
    prefix : str
        Common leading text shared by both lines
    expected_diff : str
        Differing middle span of the expected line
    expected_suffix : str
        Trailing text of the expected line after the diff region
    actual_diff : str
        Differing middle span of the actual line
    actual_suffix : str
        Trailing text of the actual line after the diff region
    expected : str
        The full expected line
    actual : str
        The full actual line

    """

    prefix: str
    expected_diff: str
    expected_suffix: str
    actual_diff: str
    actual_suffix: str
    expected: str
    actual: str

    def expected_line(self, highlight: Highlighter = _plain) -> str:
        """Rebuild the expected line with its diff region passed through ``highlight``."""
        return self.prefix + _apply(highlight, self.expected_diff) + self.expected_suffix

    def actual_line(self, highlight: Highlighter = _plain) -> str:
        """Rebuild the actual line with its diff region passed through ``highlight``."""
        return self.prefix + _apply(highlight, self.actual_diff) + self.actual_suffix

    @property
    def expected_span(self) -> tuple[int, int]:
        start = len(self.prefix)
        return start, start + len(self.expected_diff)

    @property
    def actual_span(self) -> tuple[int, int]:
        start = len(self.prefix)
        return start, start + len(self.actual_diff)

    @property
    def identical(self) -> bool:
        return not self.expected_diff and not self.actual_diff


@dataclass(frozen=True, slots=True)
class DiffOp:
    """One operation of a line-level edit script.

    ``expected`` is set for delete and paired ops, ``actual`` for insert and
    paired ops; equal ops carry the shared line in both.
    """

    tag: DiffTag
    expected: Optional[str] = None
    actual: Optional[str] = None


@dataclass(frozen=True, slots=True)
class RenderedLine:
    """A deleted or inserted logical line, reflowed into physical lines."""

    kind: DiffKind
    physical_lines: tuple[str, ...]

    @property
    def text(self) -> str:
        return "\n".join(self.physical_lines)

    def __iter__(self):
        return iter(self.physical_lines)


def flatten_lines(rendered: Iterable[RenderedLine]) -> list[str]:
    """Flatten rendered lines into printable strings, preserving order."""
    return [line for item in rendered for line in item.physical_lines]


def _apply(highlight: Highlighter, text: str) -> str:
    if not text:
        return ""
    return highlight(text)
