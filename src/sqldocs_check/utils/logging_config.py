"""Logging setup shared by the library and the command line."""

from __future__ import annotations

import logging
import sys

from sqldocs_check.config import SQLDOCS_CHECK_LOG_LEVEL

PACKAGE_LOGGER = "sqldocs_check"

_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

_handler: logging.StreamHandler | None = None


def get_logger(name: str) -> logging.Logger:
    """Return a module logger under the sqldocs_check namespace."""
    return logging.getLogger(name)


def configure_logging(level: str | int | None = None) -> logging.Handler:
    """Install a single stderr handler on the package logger.

    Calling it again reuses the handler, pointing it at the current
    ``sys.stderr`` and updating the level.
    """
    resolved = level if level is not None else SQLDOCS_CHECK_LOG_LEVEL
    if isinstance(resolved, str):
        resolved = logging.getLevelName(resolved.upper())
        if not isinstance(resolved, int):
            resolved = logging.WARNING

    package_logger = logging.getLogger(PACKAGE_LOGGER)
    package_logger.setLevel(resolved)

    global _handler
    if _handler is not None and _handler in package_logger.handlers:
        _handler.setStream(sys.stderr)
        return _handler

    _handler = logging.StreamHandler(sys.stderr)
    _handler.setFormatter(logging.Formatter(_LOG_FORMAT))
    package_logger.addHandler(_handler)
    return _handler
