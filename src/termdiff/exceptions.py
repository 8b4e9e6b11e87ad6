#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the termdiff library.

The diff engine itself never raises for malformed term text: unparseable
input routes to a simpler strategy instead. Exceptions here cover the
internal fallback signal and the configuration layer.

Exception Hierarchy
-------------------
- TermDiffError (base exception)

  - NotAMapError (term text is not a map literal; internal fallback trigger)

  - ConfigError (configuration discovery, parsing or validation failures)

"""

from __future__ import annotations

from pathlib import Path


class TermDiffError(Exception):
    """Base exception class for all termdiff-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class NotAMapError(TermDiffError):
    """Raised when term text does not parse as a map literal.

    Used by the map entry aligner to signal that the caller should fall back
    to a line-oriented diff. It never escapes the public diff functions.

    Parameters
    ----------
    text : str
        The text that failed to parse
    reason : str, optional
        Short description of what was wrong

    """

    def __init__(self, text: str, reason: str = "not a map literal"):
        """Initialize with the offending text and reason."""
        preview = text if len(text) <= 60 else text[:57] + "..."
        super().__init__(f"{reason}: {preview!r}")
        self.text = text
        self.reason = reason


class ConfigError(TermDiffError):
    """Raised when a configuration file cannot be read or is invalid.

    Parameters
    ----------
    message : str
        Description of the configuration problem
    path : Path or str, optional
        Configuration file involved, if any
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        path: Path | str | None = None,
        original_error: Exception | None = None,
    ):
        """Initialize the configuration error with the offending path."""
        super().__init__(message, original_error=original_error)
        self.path = Path(path) if path is not None else None


__all__ = [
    "TermDiffError",
    "NotAMapError",
    "ConfigError",
]
