"""SQLAlchemy implementation for tessera_identity persistence.

Provides:
- Base: Declarative base for identity models
- AccountModel, ProfileModel, LinkedIdentityModel: table mappings
- SQLAlchemyIdentityStore: unit-of-work store over an async_sessionmaker
- create_engine_from_settings: engine setup for PostgreSQL and SQLite
- create_tables / drop_tables: schema management
"""

from tessera_identity.infrastructure.persistence.sqlalchemy.base import Base
from tessera_identity.infrastructure.persistence.sqlalchemy.engine import (
    create_engine_from_settings,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.identity_store import (
    SQLAlchemyIdentityStore,
    SQLAlchemyIdentityUnitOfWork,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.init_db import (
    create_tables,
    drop_tables,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.models import (
    AccountModel,
    LinkedIdentityModel,
    ProfileModel,
)

__all__ = [
    "AccountModel",
    "Base",
    "LinkedIdentityModel",
    "ProfileModel",
    "SQLAlchemyIdentityStore",
    "SQLAlchemyIdentityUnitOfWork",
    "create_engine_from_settings",
    "create_tables",
    "drop_tables",
]
