#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/termdiff/normalize.py
"""Turn raw term values into display lines.

A term arrives as text, bytes, an iodata-like list, or ``None``. It is
decoded, optionally passed through an injected pretty-printer, and then two
literal-rewriting passes make binary syntax readable:

1. Byte-list literals whose bytes decode to printable text become quoted
   strings (``<<116,105,116,108,101>>`` -> ``"title"``).
2. Bit-size placeholders (``<<_ :: 32>>``) not already quoted become quoted
   literals of their own text, so later stages treat them as atomic leaves.

Normalization never raises.

Examples
--------
    >>> normalize("%{:title => <<116,105,116,108,101>>}")
    ['%{:title => "title"}']
    >>> normalize(None)
    []

"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Optional

from termdiff.pretty import PrettyPrinter, apply_pretty_printer

logger = logging.getLogger(__name__)

_BYTE_LIST_RE = re.compile(r"<<([\d,\s]+)>>")
_BIT_SPEC_RE = re.compile(r'(?<!")<<\s*_+[^>]*::[^>]*>>(?!")')

# Control characters that still count as printable text
_PRINTABLE_CONTROLS = frozenset("\n\r\t\v\b\f\x1b\x07")


def normalize(raw: Any, pretty_printer: Optional[PrettyPrinter] = None) -> list[str]:
    """Convert a raw term value into right-trimmed display lines.

    Parameters
    ----------
    raw : Any
        ``None``, ``str``, bytes-like, a list/tuple of text or byte chunks, or
        any other object (rendered with ``str()``)
    pretty_printer : callable, optional
        ``text -> text`` formatter applied before literal rewriting; failures
        fall back to the unformatted text

    Returns
    -------
    list[str]
        Non-empty display lines

    """
    if raw is None:
        return []

    text = to_text(raw)
    text = apply_pretty_printer(text, pretty_printer)
    text = render_binaries(text).replace("\r\n", "\n").replace("\r", "\n")

    lines = [line.rstrip() for line in text.strip().split("\n")]
    return [line for line in lines if line]


def to_text(raw: Any) -> str:
    """Decode a raw term value to ``str``."""
    if isinstance(raw, str):
        return raw
    if isinstance(raw, (bytes, bytearray, memoryview)):
        return bytes(raw).decode("utf-8", errors="replace")
    if isinstance(raw, (list, tuple)):
        return "".join(_chunk_to_text(chunk) for chunk in raw)
    return str(raw)


def _chunk_to_text(chunk: Any) -> str:
    if isinstance(chunk, int) and 0 <= chunk <= 0x10FFFF:
        return chr(chunk)
    if isinstance(chunk, (list, tuple)):
        return "".join(_chunk_to_text(part) for part in chunk)
    return to_text(chunk)


def render_binaries(text: str) -> str:
    """Apply both literal-rewriting passes to ``text``."""
    return stringify_bit_specs(replace_printable_binaries(text))


def replace_printable_binaries(text: str) -> str:
    """Replace printable byte-list literals with quoted strings.

    Examples
    --------
    >>> replace_printable_binaries("<<104,105>>")
    '"hi"'
    >>> replace_printable_binaries("<<1,2,3>>")
    '<<1,2,3>>'

    """

    def _replace(match: re.Match[str]) -> str:
        decoded = parse_printable(match.group(1))
        if decoded is None:
            return match.group(0)
        return quote(decoded)

    return _BYTE_LIST_RE.sub(_replace, text)


def stringify_bit_specs(text: str) -> str:
    """Quote bit-size placeholders that are not already inside quotes."""
    return _BIT_SPEC_RE.sub(lambda match: quote(match.group(0).strip()), text)


def parse_printable(inner: str) -> Optional[str]:
    """Decode the body of a byte-list literal if it is printable UTF-8.

    Parameters
    ----------
    inner : str
        Comma-separated byte values, e.g. ``"116, 105"``

    Returns
    -------
    str or None
        The decoded text, or ``None`` if any token is not an integer in
        0-255 or the bytes are not printable text

    """
    values: list[int] = []
    for segment in inner.split(","):
        segment = segment.strip()
        if not segment:
            continue
        if not (segment.isascii() and segment.isdigit()):
            return None
        value = int(segment)
        if value > 255:
            return None
        values.append(value)

    if not values:
        return None

    try:
        decoded = bytes(values).decode("utf-8")
    except UnicodeDecodeError:
        return None

    if not all(char.isprintable() or char in _PRINTABLE_CONTROLS for char in decoded):
        return None
    return decoded


def quote(text: str) -> str:
    """Render ``text`` as a double-quoted string literal."""
    return json.dumps(text, ensure_ascii=False)
