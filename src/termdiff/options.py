#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/termdiff/options.py
"""Options controlling diff rendering.

Options are frozen dataclasses; use :meth:`CloneFrozenMixin.create_updated`
to derive a modified copy.

Examples
--------
    >>> options = DiffOptions()
    >>> options.create_updated(color=True).color
    True

"""

from __future__ import annotations

import sys
from dataclasses import dataclass, field, fields, replace
from typing import Any, Optional

if sys.version_info >= (3, 11):
    from typing import Self
else:
    from typing_extensions import Self

from termdiff.ansi import highlighter
from termdiff.constants import (
    ANSI_COLORS,
    DEFAULT_COLOR,
    DEFAULT_DEL_COLOR,
    DEFAULT_HIGHLIGHT_COLOR,
    DEFAULT_INS_COLOR,
)
from termdiff.models import Highlighter


@dataclass(frozen=True)
class CloneFrozenMixin:
    """Mixin providing frozen dataclass cloning capabilities."""

    def create_updated(self, **kwargs: Any) -> Self:
        """Create a new instance with updated field values.

        Parameters
        ----------
        **kwargs : Any
            Field names and their new values

        Returns
        -------
        Self
            New instance with specified fields updated

        """
        return replace(self, **kwargs)


@dataclass(frozen=True)
class DiffOptions(CloneFrozenMixin):
    """Configuration for the line diff engine and renderer.

    Parameters
    ----------
    color : bool, default False
        Emit ANSI color escapes
    highlight_color : str, default "yellow"
        Color of the differing span inside a line
    del_color : str, default "red"
        Color of deleted (expected) lines
    ins_color : str, default "green"
        Color of inserted (actual) lines
    pretty_printer : str or None, default None
        ``"module:callable"`` path or ``termdiff.pretty_printers`` entry-point
        name used to reformat raw term text before diffing

    """

    color: bool = field(
        default=DEFAULT_COLOR,
        metadata={"help": "Emit ANSI color escapes in rendered lines", "importance": "core"},
    )
    highlight_color: str = field(
        default=DEFAULT_HIGHLIGHT_COLOR,
        metadata={
            "help": "Color of the differing span inside a line",
            "choices": sorted(ANSI_COLORS),
            "importance": "advanced",
        },
    )
    del_color: str = field(
        default=DEFAULT_DEL_COLOR,
        metadata={
            "help": "Color of deleted (expected) lines",
            "choices": sorted(ANSI_COLORS),
            "importance": "advanced",
        },
    )
    ins_color: str = field(
        default=DEFAULT_INS_COLOR,
        metadata={
            "help": "Color of inserted (actual) lines",
            "choices": sorted(ANSI_COLORS),
            "importance": "advanced",
        },
    )
    pretty_printer: Optional[str] = field(
        default=None,
        metadata={
            "help": "Pretty-printer to run on raw term text, as 'module:callable' or an entry-point name",
            "importance": "advanced",
        },
    )

    def __post_init__(self) -> None:
        """Validate color names.

        Raises
        ------
        ValueError
            If a color field names an unknown color

        """
        for name in ("highlight_color", "del_color", "ins_color"):
            value = getattr(self, name)
            if value not in ANSI_COLORS:
                raise ValueError(f"{name} must be one of {sorted(ANSI_COLORS)}, got {value!r}")

    @property
    def highlight(self) -> Highlighter:
        """Highlight function for differing spans under these options."""
        return highlighter(self.highlight_color, self.color)

    @classmethod
    def field_names(cls) -> list[str]:
        return [f.name for f in fields(cls)]
