"""termdiff - structural diffs of textual term renderings.

termdiff compares two stringified renderings of a nested value (maps,
structs, tuples, lists, byte-list literals) and reports what differs in a
compact, scannable form. It works on the text alone and never parses the
language the terms come from.

Key Features
------------
- Key-aligned diffs of map literals, reporting only the differing keys
- Character-level highlights narrowed to balanced delimiters
- Compaction of unchanged struct and map context to ``%Name{..., key => value}``
- Myers line diffs with positional pairing of replaced lines
- Printable byte-list literals shown as quoted strings
- Escape-safe reflow of long maps into one entry per line
- Configuration through ``.termdiff.toml`` or ``[tool.termdiff]``

Examples
--------
Diff two single-line maps:

    >>> from termdiff import diff_lines, flatten_lines
    >>> flatten_lines(diff_lines(["%{:a => 1}"], ["%{:a => 2}"]))
    ['- :a => 1', '+ :a => 2']

Normalize raw values first:

    >>> from termdiff import diff_terms
    >>> flatten_lines(diff_terms("(atom())", "(binary())"))
    ['- (atom())', '+ (binary())']

"""

#  Copyright (c) 2025 Tom Villani, Ph.D.

import logging

from termdiff.config import discover_config_file, load_config_file, load_options, options_from_config
from termdiff.engine import diff, diff_lines, diff_ops, diff_terms
from termdiff.exceptions import ConfigError, NotAMapError, TermDiffError
from termdiff.mapentries import align, parse_map
from termdiff.models import AlignedRow, DiffOp, DiffSegment, MapEntry, RenderedLine, flatten_lines
from termdiff.normalize import normalize
from termdiff.options import DiffOptions
from termdiff.pretty import load_pretty_printer
from termdiff.renderer import render
from termdiff.sections import diff_section, value_block
from termdiff.segments import diff_segment
from termdiff.splitter import split_top_level

__version__ = "0.1.0"

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    "__version__",
    # Diffing
    "diff",
    "diff_lines",
    "diff_ops",
    "diff_terms",
    "diff_segment",
    # Text handling
    "normalize",
    "split_top_level",
    "parse_map",
    "align",
    # Rendering
    "render",
    "flatten_lines",
    "value_block",
    "diff_section",
    # Models
    "AlignedRow",
    "DiffOp",
    "DiffSegment",
    "MapEntry",
    "RenderedLine",
    # Options and configuration
    "DiffOptions",
    "discover_config_file",
    "load_config_file",
    "load_options",
    "options_from_config",
    "load_pretty_printer",
    # Exceptions
    "TermDiffError",
    "NotAMapError",
    "ConfigError",
]
