#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Constants and default values for the termdiff library.

This module centralizes the syntax literals, display markers and color codes
used across the diff engine. Keeping them in one place makes the term syntax
easy to audit and keeps the scanning modules free of magic strings.

Constants are organized by category:
1. Type Definitions - Literal types and type aliases
2. Term Syntax - markers recognised inside term text
3. Display - diff markers, indentation and placeholders
4. Colors - ANSI SGR codes
5. Configuration - config file discovery
"""

from __future__ import annotations

import re
from typing import Literal

# =============================================================================
# Type Definitions
# =============================================================================

DiffKind = Literal["del", "ins"]
DiffTag = Literal["equal", "delete", "insert", "paired"]
ColorName = Literal[
    "black",
    "red",
    "green",
    "yellow",
    "blue",
    "magenta",
    "cyan",
    "white",
    "bright_black",
    "bright_red",
    "bright_green",
    "bright_yellow",
    "bright_blue",
    "bright_magenta",
    "bright_cyan",
    "bright_white",
]

# =============================================================================
# Term Syntax
# =============================================================================

MAP_PREFIX = "%{"
MAP_SUFFIX = "}"
STRUCT_MARKER = "%"
KEY_VALUE_SEPARATOR = "=>"
KEYWORD_SEPARATOR = ":"
CONTINUATION_MARKER = "..."
ENTRY_SEPARATOR = ","
BITS_OPEN = "<<"
BITS_CLOSE = ">>"
SPEC_RETURN_SEPARATOR = "::"

OPENERS = {"(": ")", "[": "]", "{": "}"}
CLOSERS = {")": "(", "]": "[", "}": "{"}

# Characters allowed in a struct/module name (``%Foo.Bar{``)
STRUCT_NAME_CHARS = frozenset("ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789._!")

STRUCT_MARKER_RE = re.compile(r"%([\w.!]+)\{")
KEYWORD_KEY_RE = re.compile(r'^\s*("(?:[^"\\]|\\.)*"|[A-Za-z_][\w?!@]*):(?=\s)')

# =============================================================================
# Display
# =============================================================================

DIFF_PREFIX_DEL = "- "
DIFF_PREFIX_INS = "+ "
INDENT = "  "
SECTION_INDENT = "    "
STRUCT_PLACEHOLDER = "{...}"
COMPACT_ELLIPSIS = "..., "
DIFF_SECTION_HEADER = "Diff (expected -, actual +):"

# =============================================================================
# Colors
# =============================================================================

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")
ANSI_RESET = "\033[0m"

ANSI_COLORS: dict[str, str] = {
    "black": "\033[30m",
    "red": "\033[31m",
    "green": "\033[32m",
    "yellow": "\033[33m",
    "blue": "\033[34m",
    "magenta": "\033[35m",
    "cyan": "\033[36m",
    "white": "\033[37m",
    "bright_black": "\033[90m",
    "bright_red": "\033[91m",
    "bright_green": "\033[92m",
    "bright_yellow": "\033[93m",
    "bright_blue": "\033[94m",
    "bright_magenta": "\033[95m",
    "bright_cyan": "\033[96m",
    "bright_white": "\033[97m",
}

DEFAULT_HIGHLIGHT_COLOR: ColorName = "yellow"
DEFAULT_DEL_COLOR: ColorName = "red"
DEFAULT_INS_COLOR: ColorName = "green"
DEFAULT_COLOR = False

# =============================================================================
# Configuration
# =============================================================================

CONFIG_FILENAMES = [".termdiff.toml", ".termdiff.yaml", ".termdiff.yml", ".termdiff.json"]
PYPROJECT_TOOL_SECTION = "termdiff"
PRETTY_PRINTER_ENTRY_POINT_GROUP = "termdiff.pretty_printers"
