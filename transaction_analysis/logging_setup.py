"""Logging for the ``transaction_analysis`` package.

Library modules only ever call ``get_logger("transaction_analysis.<module>")``;
they never attach handlers. Output is opt-in: the host application calls
:func:`configure_logging` once, which installs one stream handler on the
package root logger. Until then the package stays silent (a ``NullHandler``
sits on the root so Python does not fall back to its last-resort handler).

The only record a caller is likely to see at default levels is the WARNING
emitted when a transaction amount or date is coerced to its sentinel.
"""

from __future__ import annotations

import logging
import os
import sys
from typing import IO

PACKAGE_LOGGER = "transaction_analysis"
LEVEL_ENV_VAR = "TRANSACTION_ANALYSIS_LOG_LEVEL"
DEFAULT_FORMAT = "%(asctime)s %(name)s %(levelname)s %(message)s"


class _PackageHandler(logging.StreamHandler):
    """Stream handler installed by :func:`configure_logging`.

    A distinct type so configured state can be read off the logger itself.
    """


def _package_logger() -> logging.Logger:
    return logging.getLogger(PACKAGE_LOGGER)


def _installed_handler(logger: logging.Logger) -> _PackageHandler | None:
    for h in logger.handlers:
        if isinstance(h, _PackageHandler):
            return h
    return None


def _resolve_level(level: int | str | None) -> int:
    """Map an int, a level name or a numeric string to a level number.

    ``None`` defers to ``TRANSACTION_ANALYSIS_LOG_LEVEL``; anything
    unrecognized resolves to ``INFO``.
    """

    if level is None:
        level = os.getenv(LEVEL_ENV_VAR) or logging.INFO
    if isinstance(level, int):
        return level
    name = level.strip().upper()
    if name.isdigit():
        return int(name)
    return logging.getLevelNamesMapping().get(name, logging.INFO)


def configure_logging(
    level: int | str | None = None,
    *,
    fmt: str | None = None,
    stream: IO[str] | None = None,
    force: bool = False,
) -> logging.Logger:
    """Send package log records to ``stream`` (``sys.stderr`` by default).

    Repeat calls are no-ops unless ``force`` is set, in which case the
    previously installed handler is replaced. Records stop propagating to the
    root logger once configured. Returns the package root logger.
    """

    logger = _package_logger()
    existing = _installed_handler(logger)
    if existing is not None:
        if not force:
            return logger
        logger.removeHandler(existing)

    for h in list(logger.handlers):
        if isinstance(h, logging.NullHandler):
            logger.removeHandler(h)

    resolved = _resolve_level(level)
    handler = _PackageHandler(stream if stream is not None else sys.stderr)
    handler.setLevel(resolved)
    handler.setFormatter(logging.Formatter(fmt or DEFAULT_FORMAT))

    logger.addHandler(handler)
    logger.setLevel(resolved)
    logger.propagate = False
    return logger


def reset_logging() -> None:
    """Remove every package handler and restore propagation to the root logger."""

    logger = _package_logger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    logger.setLevel(logging.NOTSET)
    logger.propagate = True


def get_logger(name: str) -> logging.Logger:
    pkg = _package_logger()
    if not pkg.handlers:
        pkg.addHandler(logging.NullHandler())
    return logging.getLogger(name)


__all__ = ["configure_logging", "get_logger", "reset_logging"]
