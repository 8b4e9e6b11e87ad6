#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/termdiff/sections.py
"""Labeled report blocks built around diff output.

Examples
--------
    >>> value_block("Expected", ["(atom())"])
    ['Expected:', '  (atom())']
    >>> diff_section(["- (atom())", "+ (binary())"])
    ['', 'Diff (expected -, actual +):', '    - (atom())', '    + (binary())']

"""

from __future__ import annotations

from typing import Iterable, Optional, Union

from termdiff.ansi import colorize
from termdiff.constants import DEFAULT_HIGHLIGHT_COLOR, DIFF_SECTION_HEADER, INDENT, SECTION_INDENT
from termdiff.models import RenderedLine


def indent_lines(lines: Iterable[str], indent: str = INDENT) -> list[str]:
    """Prefix each non-empty line with ``indent``; empty lines stay empty."""
    return [indent + line if line else "" for line in lines]


def value_block(
    label: str,
    lines: Iterable[str],
    *,
    color: bool = False,
    color_name: Optional[str] = None,
) -> list[str]:
    """Render ``label:`` followed by the indented value lines.

    Parameters
    ----------
    label : str
        Block title, printed with a trailing colon
    lines : iterable of str
        Value lines
    color : bool, default False
        Tint the label
    color_name : str, optional
        Label color

    Returns
    -------
    list[str]
        Empty when ``lines`` is empty

    """
    lines = list(lines)
    if not lines:
        return []
    return [colorize(f"{label}:", color_name, color), *indent_lines(lines)]


def diff_section(
    rendered: Iterable[Union[RenderedLine, str]],
    *,
    color: bool = False,
    color_name: str = DEFAULT_HIGHLIGHT_COLOR,
) -> list[str]:
    """Render a blank line, the diff header and the indented diff lines.

    Parameters
    ----------
    rendered : iterable of RenderedLine or str
        Output of :func:`termdiff.engine.diff_lines`, or already flattened
        physical lines
    color : bool, default False
        Tint the header
    color_name : str, default "yellow"
        Header color

    Returns
    -------
    list[str]
        Empty when there is nothing to show

    """
    lines: list[str] = []
    for item in rendered:
        if isinstance(item, RenderedLine):
            lines.extend(item.physical_lines)
        else:
            lines.append(item)

    if not lines:
        return []
    return ["", colorize(DIFF_SECTION_HEADER, color_name, color), *indent_lines(lines, SECTION_INDENT)]
