"""Shared pytest fixtures for the normalign test suite."""

from __future__ import annotations

from collections.abc import Iterator
import sys

from loguru import logger
import pytest


@pytest.fixture(autouse=True)
def _reset_loguru() -> Iterator[None]:
    """Restore the default loguru sink after tests that attach a run logger."""

    yield
    logger.remove()
    logger.add(sys.stderr)
    logger.disable("normalign")
