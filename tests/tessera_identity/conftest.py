"""
Pytest configuration for tessera_identity tests.

Fixtures for domain objects shared by unit and integration tests.
"""

import pytest

from tessera_identity.domain.account import Account
from tests.shared.fixtures.factories import SequentialIdGenerator, TestIdentityFactory


@pytest.fixture
def alice() -> Account:
    """An ACTIVE, unverified account."""
    return TestIdentityFactory.alice()


@pytest.fixture
def bob() -> Account:
    return TestIdentityFactory.bob()


@pytest.fixture
def id_generator() -> SequentialIdGenerator:
    return SequentialIdGenerator()
