"""Shared fixtures and helper functions for tests."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from io import StringIO

import pytest

from yaschema import config
from yaschema.upgraded import get_deprecation_warning_registry


def _reset_process_state() -> None:
    get_deprecation_warning_registry().reset()
    config.reset_async_time_complexity_threshold()
    config.reset_logger()


@pytest.fixture(autouse=True)
def reset_process_state() -> Iterator[None]:
    """Reset process-wide state before and after each test to ensure test isolation."""
    _reset_process_state()
    yield
    _reset_process_state()


@pytest.fixture
def warning_stream() -> Iterator[StringIO]:
    """Route yaschema warnings to a StringIO stream for inspection."""
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(logging.Formatter("%(levelname)s: %(message)s"))

    logger = logging.getLogger("yaschema-tests")
    logger.handlers = [handler]
    logger.setLevel(logging.DEBUG)
    logger.propagate = False

    config.set_logger(logger)
    yield stream
    logger.handlers = []
