# SPDX-License-Identifier: MIT

"""Rich-backed loggers for the ``payoff_engine`` namespace.

The handler is attached to the package logger rather than the root so that
importing the engine never reconfigures an application's own logging. Module
loggers inherit the package level, which comes from ``PAYOFF_LOG_LEVEL``.
"""

from __future__ import annotations

import logging

from rich.logging import RichHandler

from ..config import settings

PACKAGE_LOGGER = "payoff_engine"


def _package_logger() -> logging.Logger:
    package = logging.getLogger(PACKAGE_LOGGER)
    if not any(isinstance(handler, RichHandler) for handler in package.handlers):
        package.addHandler(RichHandler(rich_tracebacks=True, show_path=False))
        package.setLevel(settings.log_level.upper())
    return package


def get_logger(name: str, level: int | str | None = None) -> logging.Logger:
    """Return ``name``'s logger, making sure the package Rich handler exists.

    ``level`` pins this logger only; without it the package level applies.
    """

    _package_logger()
    logger = logging.getLogger(name)
    if level is not None:
        logger.setLevel(level)
    return logger
