"""SQLAlchemy repository implementations for the identity graph."""

from tessera_identity.infrastructure.persistence.sqlalchemy.repositories.account_repository import (  # NOQA: E501
    AccountRepositorySQLAlchemy,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.repositories.linked_identity_repository import (  # NOQA: E501
    LinkedIdentityRepositorySQLAlchemy,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.repositories.profile_repository import (  # NOQA: E501
    ProfileRepositorySQLAlchemy,
)

__all__ = [
    "AccountRepositorySQLAlchemy",
    "LinkedIdentityRepositorySQLAlchemy",
    "ProfileRepositorySQLAlchemy",
]
