# tests/conftest.py

"""Shared pytest fixtures for the client tests."""

import logging
from collections.abc import Generator

import pytest


@pytest.fixture(autouse=True)
def reset_listro_logger() -> Generator[None, None, None]:
    """Drop handlers added by setup_logging so each test starts clean."""
    yield
    root_logger = logging.getLogger("listro")
    for handler in list(root_logger.handlers):
        root_logger.removeHandler(handler)
        handler.close()
