"""Pytest configuration and fixtures."""

import logging

import pytest

from testy import RecordingCase, new, new_case


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Drop handlers attached to the testy logger so log files don't leak between tests."""
    yield

    logger = logging.getLogger("testy")
    for handler in logger.handlers:
        handler.close()
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


@pytest.fixture
def mock_case() -> RecordingCase:
    """A bare in-memory case standing in for a real test."""
    return RecordingCase()


@pytest.fixture
def facade(mock_case):
    return new(mock_case)


@pytest.fixture
def named_facade(mock_case):
    return new_case(mock_case, "Logging test")
