"""SQLAlchemy-backed IdentityStore."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.exc import DBAPIError, IntegrityError, InterfaceError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from tessera_identity.application.ports import IdentityStore, IdentityUnitOfWork
from tessera_identity.domain.account import (
    AccountRepository,
    LinkedIdentityRepository,
    ProfileRepository,
)
from tessera_identity.domain.shared.exceptions import (
    ConflictError,
    StorageUnavailableError,
    TransientStorageError,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.repositories import (
    AccountRepositorySQLAlchemy,
    LinkedIdentityRepositorySQLAlchemy,
    ProfileRepositorySQLAlchemy,
)

logger = logging.getLogger(__name__)


class SQLAlchemyIdentityUnitOfWork(IdentityUnitOfWork):
    """Repositories sharing one AsyncSession, and therefore one transaction."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session
        self._accounts = AccountRepositorySQLAlchemy(session)
        self._profiles = ProfileRepositorySQLAlchemy(session)
        self._linked_identities = LinkedIdentityRepositorySQLAlchemy(session)

    @property
    def session(self) -> AsyncSession:
        return self._session

    @property
    def accounts(self) -> AccountRepository:
        return self._accounts

    @property
    def profiles(self) -> ProfileRepository:
        return self._profiles

    @property
    def linked_identities(self) -> LinkedIdentityRepository:
        return self._linked_identities


class SQLAlchemyIdentityStore(IdentityStore):
    """IdentityStore on top of an async_sessionmaker.

    Each ``transaction()`` opens a new session and transaction. Driver
    errors never leave this class raw:

    - lost connections, lock timeouts -> TransientStorageError
    - constraint violations no repository translated -> ConflictError
    - any other driver error -> StorageUnavailableError
    """

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    @classmethod
    def from_engine(cls, engine: AsyncEngine) -> "SQLAlchemyIdentityStore":
        return cls(
            async_sessionmaker(
                engine,
                class_=AsyncSession,
                expire_on_commit=False,
            ),
        )

    @asynccontextmanager
    async def transaction(self) -> AsyncIterator[IdentityUnitOfWork]:
        try:
            async with self._session_maker() as session, session.begin():
                yield SQLAlchemyIdentityUnitOfWork(session)
        except IntegrityError as e:
            logger.debug("Untranslated integrity error: %s", e.orig)
            raise ConflictError(
                "Write rejected by a storage constraint",
                details={"reason": str(e.orig)},
            ) from e
        except (OperationalError, InterfaceError) as e:
            raise TransientStorageError(str(e.orig)) from e
        except DBAPIError as e:
            if e.connection_invalidated:
                raise TransientStorageError(str(e.orig)) from e
            logger.error("Storage error: %s", e)
            raise StorageUnavailableError(details={"reason": str(e.orig)}) from e
        except OSError as e:
            raise TransientStorageError(str(e)) from e
