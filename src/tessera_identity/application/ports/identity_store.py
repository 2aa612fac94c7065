"""Storage capability consumed by the application services."""

from abc import ABC, abstractmethod
from contextlib import AbstractAsyncContextManager

from tessera_identity.domain.account.repositories import (
    AccountRepository,
    LinkedIdentityRepository,
    ProfileRepository,
)


class IdentityUnitOfWork(ABC):
    """Repositories bound to one storage transaction.

    Everything done through one unit of work commits or rolls back
    together.
    """

    @property
    @abstractmethod
    def accounts(self) -> AccountRepository:
        """Account repository bound to this transaction."""

    @property
    @abstractmethod
    def profiles(self) -> ProfileRepository:
        """Profile repository bound to this transaction."""

    @property
    @abstractmethod
    def linked_identities(self) -> LinkedIdentityRepository:
        """Linked identity repository bound to this transaction."""


class IdentityStore(ABC):
    """Transactional store for the account graph.

    Implementations must enforce, at the storage level:
    - unique primary email among accounts whose status is not DELETED
    - unique (provider, provider_account_id) across all linked identities
    - at most one non-revoked linked identity per (account, provider)

    Transient failures (lost connection, lock timeouts) must be raised as
    TransientStorageError so the caller can retry the whole unit of work.
    """

    @abstractmethod
    def transaction(self) -> AbstractAsyncContextManager[IdentityUnitOfWork]:
        """Open a unit of work.

        Commits when the block exits normally and rolls back on any
        exception, including cancellation.
        """
