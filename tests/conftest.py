"""Root test fixtures shared across all test types.

Database fixtures live in tests/integration/conftest.py.
"""

import os

# Set APP_ENV before any app imports
os.environ.setdefault("APP_ENV", "testing")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///:memory:")

# ruff: noqa: E402 - Imports must be after env var setup
from uuid import uuid4

import pytest

from src.applypath.core.config import get_settings
from src.applypath.core.policy import Actor
from src.applypath.models import ProfileRole

# Clear settings cache to ensure test environment variables are picked up
get_settings.cache_clear()


@pytest.fixture
def manager() -> Actor:
    """A manager actor that exists only in memory."""
    return Actor(id=uuid4(), role=ProfileRole.MANAGER)


@pytest.fixture
def consultant() -> Actor:
    """A consultant actor that exists only in memory."""
    return Actor(id=uuid4(), role=ProfileRole.CONSULTANT)
