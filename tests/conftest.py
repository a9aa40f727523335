"""Pytest configuration and fixtures."""

import logging

import pytest


@pytest.fixture(autouse=True)
def cleanup_loggers():
    """Reset metatesting loggers after each test so handlers don't leak between tests."""
    yield

    for name in list(logging.Logger.manager.loggerDict.keys()):
        if not name.startswith("metatesting"):
            continue
        logger = logging.getLogger(name)
        for handler in logger.handlers:
            handler.close()
        logger.handlers.clear()
        logger.setLevel(logging.NOTSET)
        logger.propagate = True
