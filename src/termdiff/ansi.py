#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/termdiff/ansi.py
"""ANSI color helpers.

Colors are plain SGR escape sequences so output can go straight to a terminal
or a log file. When coloring is disabled every helper is the identity, which
keeps uncolored output byte-for-byte stable.
"""

from __future__ import annotations

from typing import Callable, Optional

from termdiff.constants import ANSI_COLORS, ANSI_ESCAPE_RE, ANSI_RESET


def color_code(color: str) -> str:
    """Return the SGR sequence for a color name.

    Parameters
    ----------
    color : str
        One of the names in ``ANSI_COLORS``

    Returns
    -------
    str
        The escape sequence

    Raises
    ------
    ValueError
        If the color name is unknown

    """
    try:
        return ANSI_COLORS[color]
    except KeyError:
        raise ValueError(f"Unknown color {color!r}; expected one of {sorted(ANSI_COLORS)}") from None


def colorize(text: str, color: Optional[str], enabled: bool) -> str:
    """Wrap ``text`` in color codes when ``enabled`` is true.

    Resets already inside ``text`` (from nested highlights) are followed by the
    outer color again so the remainder of the span keeps its tint.

    Parameters
    ----------
    text : str
        Text to tint
    color : str or None
        Color name; ``None`` leaves the text untouched
    enabled : bool
        Master switch for coloring

    Returns
    -------
    str
        Tinted text, or ``text`` unchanged when disabled

    Examples
    --------
    >>> colorize("x", "red", False)
    'x'
    >>> colorize("x", "red", True)
    '\\x1b[31mx\\x1b[0m'

    """
    if not enabled or color is None:
        return text

    code = color_code(color)
    tinted = text.replace(ANSI_RESET, ANSI_RESET + code)
    return f"{code}{tinted}{ANSI_RESET}"


def strip_ansi(text: str) -> str:
    """Remove every SGR escape sequence from ``text``."""
    return ANSI_ESCAPE_RE.sub("", text)


def highlighter(color: Optional[str], enabled: bool) -> Callable[[str], str]:
    """Build a one-argument highlight function; empty spans stay empty."""

    def _highlight(text: str) -> str:
        if not text:
            return ""
        return colorize(text, color, enabled)

    return _highlight


def split_escapes(text: str) -> tuple[str, list[tuple[int, str]]]:
    """Separate ``text`` into plain text and positioned escape sequences.

    Each escape is recorded with the offset, in the plain text, of the
    character it precedes.

    Examples
    --------
    >>> split_escapes("a\\x1b[33mb\\x1b[0m")
    ('ab', [(1, '\\x1b[33m'), (2, '\\x1b[0m')])

    """
    plain: list[str] = []
    markers: list[tuple[int, str]] = []
    length = 0
    position = 0
    for match in ANSI_ESCAPE_RE.finditer(text):
        chunk = text[position : match.start()]
        plain.append(chunk)
        length += len(chunk)
        markers.append((length, match.group(0)))
        position = match.end()
    plain.append(text[position:])
    return "".join(plain), markers
