#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/termdiff/splitter.py
"""Delimiter-aware scanning of term text.

Term text is never parsed into a tree. Instead a small tokenizer walks the
text left to right and a :class:`ScanState` tracks nesting depth for
parentheses, brackets, braces, byte-list literals (``<<...>>``) and
double-quoted strings. A separator only counts when every counter is zero.
ANSI color escapes are single opaque tokens, so colorized text splits the
same way as plain text.

Functions
---------
split_top_level : Split on a separator that sits outside any nesting
split_key_value : Split one map entry into key, value and separator style
unmatched_closers : Closers needed to balance a fragment
take_outer_paren : Split ``(inner)rest`` at the matching parenthesis

Examples
--------
    >>> split_top_level("a,(b,c),d", ",")
    ['a', '(b,c)', 'd']
    >>> split_key_value(":a => %{:b => 1}")
    (':a', '%{:b => 1}', '=>')

"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Iterator, Literal, NamedTuple, Optional

from termdiff.constants import (
    BITS_CLOSE,
    BITS_OPEN,
    CLOSERS,
    KEY_VALUE_SEPARATOR,
    KEYWORD_KEY_RE,
    KEYWORD_SEPARATOR,
    OPENERS,
)

TokenKind = Literal["ansi", "bits_open", "bits_close", "open", "close", "quote", "escape", "char"]


class Token(NamedTuple):
    """A lexical unit of term text."""

    kind: TokenKind
    text: str
    start: int

    @property
    def end(self) -> int:
        return self.start + len(self.text)


def next_token(text: str, index: int) -> Token:
    """Read the token starting at ``index``.

    Parameters
    ----------
    text : str
        Text being scanned
    index : int
        Position of the first character of the token

    Returns
    -------
    Token
        The token; always at least one character long

    """
    char = text[index]

    if char == "\x1b" and text.startswith("[", index + 1):
        end = text.find("m", index + 2)
        end = len(text) if end == -1 else end + 1
        return Token("ansi", text[index:end], index)
    if text.startswith(BITS_OPEN, index):
        return Token("bits_open", BITS_OPEN, index)
    if text.startswith(BITS_CLOSE, index):
        return Token("bits_close", BITS_CLOSE, index)
    if char in OPENERS:
        return Token("open", char, index)
    if char in CLOSERS:
        return Token("close", char, index)
    if char == '"':
        return Token("quote", char, index)
    if char == "\\" and index + 1 < len(text):
        return Token("escape", text[index : index + 2], index)
    return Token("char", char, index)


def tokenize(text: str) -> Iterator[Token]:
    """Yield the tokens of ``text`` in order."""
    index = 0
    while index < len(text):
        token = next_token(text, index)
        yield token
        index = token.end


@dataclass
class ScanState:
    """Nesting depth while scanning term text."""

    paren: int = 0
    bracket: int = 0
    brace: int = 0
    bits: int = 0
    quoted: bool = False

    @property
    def top_level(self) -> bool:
        return not self.quoted and self.paren == 0 and self.bracket == 0 and self.brace == 0 and self.bits == 0

    def feed(self, token: Token) -> None:
        """Update the depth counters for one token."""
        kind = token.kind
        if kind == "ansi":
            return

        if self.quoted:
            if kind == "quote":
                self.quoted = False
            return

        if kind == "quote":
            self.quoted = True
        elif kind == "bits_open":
            self.bits += 1
        elif kind == "bits_close":
            if self.bits > 0:
                self.bits -= 1
        elif kind == "open":
            self._adjust(token.text, 1)
        elif kind == "close":
            self._adjust(CLOSERS[token.text], -1)

    def _adjust(self, opener: str, delta: int) -> None:
        name = {"(": "paren", "[": "bracket", "{": "brace"}[opener]
        value = getattr(self, name) + delta
        setattr(self, name, max(value, 0))


def split_top_level(text: str, separator: str, maxsplit: int = -1) -> list[str]:
    """Split ``text`` on ``separator`` wherever it is not nested.

    Pieces are returned untrimmed and empty pieces are kept, so joining them
    with ``separator`` restores ``text`` exactly.

    Parameters
    ----------
    text : str
        Text to split; may contain ANSI escapes
    separator : str
        Non-empty separator string
    maxsplit : int, default -1
        Maximum number of splits; negative means unlimited

    Returns
    -------
    list[str]
        The pieces

    Raises
    ------
    ValueError
        If ``separator`` is empty

    """
    if not separator:
        raise ValueError("separator must be a non-empty string")

    pieces: list[str] = []
    state = ScanState()
    start = 0
    index = 0

    while index < len(text):
        if (
            state.top_level
            and text.startswith(separator, index)
            and (maxsplit < 0 or len(pieces) < maxsplit)
        ):
            pieces.append(text[start:index])
            index += len(separator)
            start = index
            continue

        token = next_token(text, index)
        state.feed(token)
        index = token.end

    pieces.append(text[start:])
    return pieces


def split_key_value(entry: str) -> Optional[tuple[str, str, str]]:
    """Split a map entry on its first top-level key/value separator.

    ``key => value`` entries are tried first, then keyword entries
    (``key: value``).

    Parameters
    ----------
    entry : str
        A single map entry

    Returns
    -------
    tuple[str, str, str] or None
        ``(key, value, separator)`` with both sides trimmed, or ``None`` when
        the entry has no separator

    """
    parts = split_top_level(entry, KEY_VALUE_SEPARATOR, maxsplit=1)
    if len(parts) == 2:
        return parts[0].strip(), parts[1].strip(), KEY_VALUE_SEPARATOR

    match = KEYWORD_KEY_RE.match(entry)
    if match:
        return match.group(1), entry[match.end() :].strip(), KEYWORD_SEPARATOR

    return None


def unmatched_closers(text: str) -> list[str]:
    """Return the closers ``text`` still owes, innermost first.

    Color escapes and delimiters inside double-quoted strings are ignored, and
    a stray closer with no matching opener on top of the stack is skipped.

    Examples
    --------
    >>> unmatched_closers("f([a")
    [']', ')']
    >>> unmatched_closers('f("(')
    [')']

    """
    stack: list[str] = []
    quoted = False
    for token in tokenize(text):
        if token.kind == "quote":
            quoted = not quoted
        elif quoted:
            continue
        elif token.kind == "open":
            stack.append(token.text)
        elif token.kind == "close" and stack and stack[-1] == CLOSERS[token.text]:
            stack.pop()
    return [OPENERS[opener] for opener in reversed(stack)]


def take_outer_paren(text: str) -> Optional[tuple[str, str]]:
    """Split text of the form ``(inner)rest`` at the matching parenthesis.

    Returns
    -------
    tuple[str, str] or None
        ``(inner, rest)``, or ``None`` when ``text`` does not start with ``(``
        or the parenthesis is never closed

    """
    if not text.startswith("("):
        return None

    state = ScanState()
    for token in tokenize(text):
        state.feed(token)
        if token.kind == "close" and token.text == ")" and state.paren == 0 and not state.quoted:
            return text[1 : token.start], text[token.end :]
    return None


def wraps_in_parens(text: str) -> bool:
    """Whether the whole of ``text`` is one parenthesized group."""
    outer = take_outer_paren(text)
    return outer is not None and outer[1] == ""
