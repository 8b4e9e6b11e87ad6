#  Copyright (c) 2025 Tom Villani, Ph.D.
#
# src/termdiff/logging_utils.py
"""Logging setup for scripts and test harnesses that embed termdiff.

The library only writes through module-level loggers under the ``termdiff``
namespace and installs a ``NullHandler`` on import. Nothing is printed until
the host application configures handlers, for example with
:func:`configure_logging`.
"""

from __future__ import annotations

import logging
import sys
from typing import Optional

PACKAGE_LOGGER = "termdiff"


def resolve_level(log_level: int | str) -> int:
    """Turn a level name such as ``"debug"`` into its numeric value.

    Unknown names resolve to ``logging.INFO``.
    """
    if isinstance(log_level, int):
        return log_level
    return getattr(logging, str(log_level).upper(), logging.INFO)


def configure_logging(
    log_level: int | str,
    log_file: Optional[str] = None,
    trace_mode: bool = False,
) -> logging.Logger:
    """Attach stderr (and optionally file) handlers to the ``termdiff`` logger.

    Calling it again replaces the handlers installed by the previous call, so
    it is safe to use from test fixtures.

    Parameters
    ----------
    log_level : int | str
        Numeric logging level or level name (e.g., "DEBUG")
    log_file : str, optional
        Also append records to this file
    trace_mode : bool, default False
        Include timestamps and logger names, useful when following which diff
        strategy handled a line

    Returns
    -------
    logging.Logger
        The ``termdiff`` package logger

    """
    level = resolve_level(log_level)

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(level)
    for handler in list(package_logger.handlers):
        if not isinstance(handler, logging.NullHandler):
            package_logger.removeHandler(handler)
            handler.close()

    if trace_mode:
        formatter = logging.Formatter("[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s", "%Y-%m-%d %H:%M:%S")
    else:
        formatter = logging.Formatter("%(name)s: %(levelname)s: %(message)s")

    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        try:
            handlers.append(logging.FileHandler(log_file, mode="a", encoding="utf-8"))
        except OSError as e:
            package_logger.warning(f"Could not open log file {log_file}: {e}")

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        package_logger.addHandler(handler)

    # Records are handled here; do not print them twice through the root logger
    package_logger.propagate = False
    return package_logger
