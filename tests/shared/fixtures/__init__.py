"""Shared pytest fixtures for all test domains."""

from tests.shared.fixtures.database import (
    make_test_settings,
    postgres_container,
    postgres_engine,
    postgres_settings,
    postgres_store,
    sqlite_engine,
    sqlite_settings,
    sqlite_store,
)
from tests.shared.fixtures.factories import (
    SequentialIdGenerator,
    TestIdentityFactory,
    make_mock_store,
)

__all__ = [
    "SequentialIdGenerator",
    "TestIdentityFactory",
    "make_mock_store",
    "make_test_settings",
    "postgres_container",
    "postgres_engine",
    "postgres_settings",
    "postgres_store",
    "sqlite_engine",
    "sqlite_settings",
    "sqlite_store",
]
