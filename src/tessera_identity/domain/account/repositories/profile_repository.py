"""Profile repository interface."""

from abc import ABC, abstractmethod
from typing import Optional

from tessera_identity.domain.account.entities.profile import Profile


class ProfileRepository(ABC):
    """Repository interface for account profiles."""

    @abstractmethod
    async def find_by_account_id(self, account_id: str) -> Optional[Profile]:
        """Find the profile of an account, including soft-deleted ones."""

    @abstractmethod
    async def save(self, profile: Profile) -> None:
        """Insert or update a profile."""

    @abstractmethod
    async def delete_by_account_id(self, account_id: str) -> int:
        """Physically remove the profile of an account. Returns rows removed."""

    @abstractmethod
    async def search_by_display_name(self, keyword: str) -> list[Profile]:
        """Substring search over display names of non-deleted profiles."""
