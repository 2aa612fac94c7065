"""LinkedIdentity repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from tessera_identity.domain.account.entities.linked_identity import LinkedIdentity
from tessera_identity.domain.account.value_objects import OAuthProvider


class LinkedIdentityRepository(ABC):
    """Repository interface for linked external identities."""

    @abstractmethod
    async def find_by_provider_account(
        self,
        provider: OAuthProvider,
        provider_account_id: str,
    ) -> Optional[LinkedIdentity]:
        """Find the row for a provider pair, whatever its status."""

    @abstractmethod
    async def exists_by_provider_account(
        self,
        provider: OAuthProvider,
        provider_account_id: str,
    ) -> bool:
        """Check if any row (revoked included) holds the provider pair."""

    @abstractmethod
    async def find_current_by_account_and_provider(
        self,
        account_id: str,
        provider: OAuthProvider,
    ) -> Optional[LinkedIdentity]:
        """Find the non-revoked link of an account for a provider."""

    @abstractmethod
    async def list_by_account(self, account_id: str) -> list[LinkedIdentity]:
        """List every link of an account, revoked ones included."""

    @abstractmethod
    async def list_active_by_account(self, account_id: str) -> list[LinkedIdentity]:
        """List ACTIVE links of an account."""

    @abstractmethod
    async def save(self, linked_identity: LinkedIdentity) -> None:
        """Insert or update a link.

        Raises ProviderLinkAlreadyExistsError or ProviderAlreadyLinkedError
        when a storage uniqueness constraint rejects the write.
        """

    @abstractmethod
    async def delete_by_account_id(self, account_id: str) -> int:
        """Physically remove all links of an account. Returns rows removed."""
