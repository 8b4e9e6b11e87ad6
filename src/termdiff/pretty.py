#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/termdiff/pretty.py
"""Optional external pretty-printing of term text.

A pretty-printer is any callable taking and returning ``str``. None is
required: the default is the identity. Printers can be passed directly, named
as ``"package.module:callable"``, or registered by third-party packages under
the ``termdiff.pretty_printers`` entry-point group::

    [project.entry-points."termdiff.pretty_printers"]
    erlang = "my_package.format:pretty_print"

A failing printer never breaks a diff; the original text is used instead.
"""

from __future__ import annotations

import importlib
import importlib.metadata
import logging
from typing import Callable, Optional

from termdiff.constants import PRETTY_PRINTER_ENTRY_POINT_GROUP

logger = logging.getLogger(__name__)

PrettyPrinter = Callable[[str], str]


def identity(text: str) -> str:
    """Return ``text`` unchanged."""
    return text


def apply_pretty_printer(text: str, printer: Optional[PrettyPrinter]) -> str:
    """Run ``printer`` over ``text``, falling back to ``text`` on any failure.

    Parameters
    ----------
    text : str
        Text to format
    printer : callable or None
        The pretty-printer; ``None`` means identity

    Returns
    -------
    str
        Formatted text, or the input when the printer raised or returned a
        non-string

    """
    if printer is None:
        return text

    try:
        result = printer(text)
    except Exception as e:
        logger.debug(f"Pretty-printer {printer!r} failed, using original text: {e}")
        return text

    if isinstance(result, (bytes, bytearray)):
        return bytes(result).decode("utf-8", errors="replace")
    if not isinstance(result, str):
        logger.debug(f"Pretty-printer {printer!r} returned {type(result).__name__}, using original text")
        return text
    return result


def load_pretty_printer(spec: Optional[str]) -> PrettyPrinter:
    """Resolve a pretty-printer from a ``module:attr`` path or entry-point name.

    Parameters
    ----------
    spec : str or None
        ``"package.module:callable"`` or the name of an entry point in the
        ``termdiff.pretty_printers`` group. ``None`` or ``""`` selects the
        identity printer.

    Returns
    -------
    callable
        The resolved printer, or :func:`identity` when it cannot be loaded

    Examples
    --------
    >>> load_pretty_printer(None) is identity
    True
    >>> load_pretty_printer("textwrap:dedent")("  x")
    'x'

    """
    if not spec:
        return identity

    if ":" in spec:
        printer = _load_from_path(spec)
    else:
        printer = _load_from_entry_point(spec)

    if printer is None:
        return identity
    if not callable(printer):
        logger.warning(f"Pretty-printer '{spec}' is not callable, falling back to identity")
        return identity
    return printer


def _load_from_path(spec: str) -> Optional[PrettyPrinter]:
    module_path, _, attr_path = spec.partition(":")
    try:
        target = importlib.import_module(module_path)
        for attr in attr_path.split("."):
            target = getattr(target, attr)
    except Exception as e:
        logger.warning(f"Could not load pretty-printer '{spec}': {e}")
        return None
    return target


def _load_from_entry_point(name: str) -> Optional[PrettyPrinter]:
    try:
        entry_points = importlib.metadata.entry_points().select(group=PRETTY_PRINTER_ENTRY_POINT_GROUP, name=name)
    except Exception as e:
        logger.warning(f"Failed to discover pretty-printer plugins: {e}")
        return None

    for ep in entry_points:
        try:
            printer = ep.load()
        except Exception as e:
            logger.warning(f"Failed to load pretty-printer entry point '{ep.name}': {e}")
            return None
        logger.debug(f"Loaded pretty-printer from entry point: {ep.name}")
        return printer

    logger.warning(f"No pretty-printer registered under '{name}' in {PRETTY_PRINTER_ENTRY_POINT_GROUP}")
    return None
