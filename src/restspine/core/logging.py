"""Logging setup for restspine.

Library modules only create loggers under the ``restspine`` namespace.
Applications (and the CLI) call :func:`configure_logging` to attach a
handler.
"""

from __future__ import annotations

import logging

from restspine.core.config import Settings, get_settings

LOGGER_NAME = "restspine"
LOG_FORMAT = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"


def configure_logging(settings: Settings | None = None, level: str | None = None) -> logging.Logger:
    """Attach a stream handler to the ``restspine`` logger.

    Calling it again replaces the previously installed handler.

    Args:
        settings: Settings to read ``log_level`` from (default: environment)
        level: Explicit level name, takes precedence over settings

    Returns:
        The configured ``restspine`` logger
    """
    settings = settings or get_settings()
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel((level or settings.log_level).upper())

    for handler in list(logger.handlers):
        if getattr(handler, "_restspine", False):
            logger.removeHandler(handler)

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._restspine = True  # type: ignore[attr-defined]
    logger.addHandler(handler)
    return logger


__all__ = [
    "LOGGER_NAME",
    "configure_logging",
]
