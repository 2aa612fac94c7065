"""Account repository interface."""

from abc import ABC, abstractmethod
from typing import Optional, Union

from tessera_identity.domain.account.aggregates.account import Account
from tessera_identity.domain.account.value_objects import (
    AccountStatus,
    Email,
    OAuthProvider,
)


class AccountRepository(ABC):
    """Repository interface for Account aggregates."""

    @abstractmethod
    async def find_by_id(self, account_id: str) -> Optional[Account]:
        """Find an account by its ID, whatever its status."""

    @abstractmethod
    async def find_active_by_email(self, email: Union[str, Email]) -> Optional[Account]:
        """Find the non-deleted account holding this primary email."""

    @abstractmethod
    async def exists_active_by_email(
        self,
        email: Union[str, Email],
        exclude_account_id: Optional[str] = None,
    ) -> bool:
        """Check if a non-deleted account (other than the excluded one) holds the email."""

    @abstractmethod
    async def find_by_provider_account(
        self,
        provider: OAuthProvider,
        provider_account_id: str,
    ) -> Optional[Account]:
        """Find the account owning the linked identity for this provider pair."""

    @abstractmethod
    async def save(self, account: Account) -> None:
        """Insert or update an account.

        Raises EmailAlreadyExistsError when the storage constraint on
        non-deleted primary emails rejects the write.
        """

    @abstractmethod
    async def delete(self, account_id: str) -> bool:
        """Physically remove an account row. Dependants must be gone already."""

    @abstractmethod
    async def list_by_status(self, status: AccountStatus) -> list[Account]:
        """List accounts with the given status, oldest first."""

    @abstractmethod
    async def list_active_verified(self) -> list[Account]:
        """List ACTIVE accounts whose email is verified."""

    @abstractmethod
    async def search_by_email(self, keyword: str) -> list[Account]:
        """Case-insensitive substring search over primary emails."""

    @abstractmethod
    async def count(self) -> int:
        """Count all account rows."""
