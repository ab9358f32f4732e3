"""Shared fixtures for scheduler tests."""

from datetime import date, datetime, timezone

import pytest
import structlog


@pytest.fixture
def now() -> datetime:
    return datetime(2024, 1, 10, 9, 30, tzinfo=timezone.utc)


@pytest.fixture
def today() -> date:
    return date(2024, 3, 1)


@pytest.fixture(autouse=True)
def _reset_structlog():
    """Undo configure_logging() calls made by individual tests."""
    yield
    structlog.reset_defaults()
