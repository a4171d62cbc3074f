"""Tests for configure_logging."""

from __future__ import annotations

import logging

import pytest

from restspine.core.config import Settings
from restspine.core.logging import LOGGER_NAME, configure_logging


@pytest.fixture(autouse=True)
def restore_logger():
    logger = logging.getLogger(LOGGER_NAME)
    handlers, level = list(logger.handlers), logger.level
    yield
    logger.handlers[:] = handlers
    logger.setLevel(level)


def test_level_from_settings() -> None:
    logger = configure_logging(Settings(log_level="warning"))
    assert logger.name == "restspine"
    assert logger.level == logging.WARNING


def test_explicit_level_wins() -> None:
    logger = configure_logging(Settings(log_level="ERROR"), level="debug")
    assert logger.level == logging.DEBUG


def test_handler_replaced_on_reconfigure() -> None:
    """Repeated calls keep exactly one restspine handler."""
    configure_logging(level="INFO")
    logger = configure_logging(level="DEBUG")
    ours = [handler for handler in logger.handlers if getattr(handler, "_restspine", False)]
    assert len(ours) == 1
