"""
Pytest configuration for tessera_identity integration tests.

Store-backed tests run against a temporary SQLite file by default.
Tests marked ``@pytest.mark.integration`` use a Testcontainers
PostgreSQL instance instead.
"""

import pytest

from tessera_identity.application.factories import build_identity_services

# Re-export shared database fixtures
from tests.shared.fixtures.database import (
    postgres_container,
    postgres_engine,
    postgres_settings,
    postgres_store,
    sqlite_engine,
    sqlite_settings,
    sqlite_store,
)

__all__ = [
    "postgres_container",
    "postgres_engine",
    "postgres_settings",
    "postgres_store",
    "sqlite_engine",
    "sqlite_settings",
    "sqlite_store",
]


@pytest.fixture
def services(sqlite_store, sqlite_settings):
    """All identity services bound to the SQLite test store."""
    return build_identity_services(sqlite_store, sqlite_settings)
