"""Logging configuration for the evolutionary core.

This module contains:
- ``get_logger``: module loggers under the library's package names
- ``configure_logging``: stream handler setup for scripts and experiments

The library itself never installs handlers beyond a ``NullHandler`` on its
package loggers, so importing it stays silent until an application opts in.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Iterable
from typing import IO

__all__ = ["PACKAGE_LOGGERS", "DEFAULT_FORMAT", "get_logger", "configure_logging"]

PACKAGE_LOGGERS = ("core", "sampling", "constraints", "selection")

DEFAULT_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

for _name in PACKAGE_LOGGERS:
    logging.getLogger(_name).addHandler(logging.NullHandler())


def get_logger(name: str) -> logging.Logger:
    """Return the logger for a library module (pass ``__name__``)."""
    return logging.getLogger(name)


def configure_logging(
    level: int | str = logging.INFO,
    fmt: str = DEFAULT_FORMAT,
    stream: IO[str] | None = None,
    names: Iterable[str] = PACKAGE_LOGGERS,
) -> logging.Handler:
    """Attach a stream handler to the package loggers.

    Calling this again replaces the handler installed by the previous call
    instead of stacking a second one.

    Args:
        level: Logging level name or number.
        fmt: Format string for the handler.
        stream: Output stream. Defaults to ``sys.stderr``.
        names: Logger names to configure.

    Returns:
        The installed handler.
    """
    if isinstance(level, str):
        resolved = logging.getLevelName(level.upper())
        if not isinstance(resolved, int):
            raise ValueError(f"Unknown logging level: {level}")
        level = resolved

    handler = logging.StreamHandler(stream if stream is not None else sys.stderr)
    handler.setFormatter(logging.Formatter(fmt))
    handler.set_name("evocore")
    for name in names:
        logger = logging.getLogger(name)
        for old in [h for h in logger.handlers if h.get_name() == "evocore"]:
            logger.removeHandler(old)
        logger.addHandler(handler)
        logger.setLevel(level)
    return handler
