"""Pytest configuration and fixtures."""

import logging

import pytest

from casework import TestSet


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Drop handlers added to casework loggers so tests do not leak output."""
    yield

    for name in list(logging.Logger.manager.loggerDict.keys()):
        if name.startswith("casework"):
            logger = logging.getLogger(name)
            for handler in logger.handlers:
                handler.close()
            logger.handlers.clear()


@pytest.fixture
def suite():
    return TestSet("suite")
