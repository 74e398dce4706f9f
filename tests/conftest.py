"""Shared fixtures for the foldcut test suite."""

import logging

import pytest


@pytest.fixture(autouse=True)
def restore_root_handlers():
    """Remove handlers installed by configure_logging during a test."""
    root = logging.getLogger()
    before = list(root.handlers)
    level = root.level
    yield
    for handler in list(root.handlers):
        added = type(handler) in (logging.FileHandler, logging.StreamHandler)
        if added and handler not in before:
            root.removeHandler(handler)
            handler.close()
    root.setLevel(level)
