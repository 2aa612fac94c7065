"""Profile management for accounts."""

import logging

from tessera_identity.application.ports import (
    IdentityStore,
    IdentityUnitOfWork,
    IdGenerator,
)
from tessera_identity.application.services.transaction_runner import (
    TransactionRunner,
)
from tessera_identity.domain.account import (
    Account,
    AccountNotFoundError,
    Profile,
    ProfileNotFoundError,
    ProfileUpdate,
)
from tessera_identity.domain.shared.identifiers import UuidIdGenerator

logger = logging.getLogger(__name__)


class ProfileService:
    """Reads and edits the 1:1 profile of an account.

    Profiles of deleted accounts are read-only. A missing profile is
    created on first update, so accounts predating profiles still work.
    """

    def __init__(
        self,
        store: IdentityStore,
        id_generator: IdGenerator | None = None,
        default_timeout: float | None = None,
        transient_retries: int = TransactionRunner.DEFAULT_TRANSIENT_RETRIES,
    ):
        self._runner = TransactionRunner(store, default_timeout, transient_retries)
        self._ids = id_generator or UuidIdGenerator()

    async def get_profile(
        self,
        account_id: str,
        include_deleted: bool = False,
        timeout: float | None = None,
    ) -> Profile:
        async def work(uow: IdentityUnitOfWork) -> Profile:
            await self._get_account(uow, account_id)
            profile = await uow.profiles.find_by_account_id(account_id)
            if profile is None or (profile.is_deleted and not include_deleted):
                raise ProfileNotFoundError(account_id)
            return profile

        return await self._runner.run(work, timeout, "get_profile")

    async def update_profile(
        self,
        account_id: str,
        update: ProfileUpdate,
        timeout: float | None = None,
    ) -> Profile:
        """Apply a partial edit.

        Raises
        ------
        InvalidProfileFieldError
            If a value exceeds its field limit
        InvalidTransitionError
            If the account is deleted
        ProfileNotFoundError
            If the profile is soft-deleted
        """

        async def work(uow: IdentityUnitOfWork) -> Profile:
            account = await self._get_account(uow, account_id)
            account.ensure_not_deleted("update profile")

            profile = await uow.profiles.find_by_account_id(account_id)
            created = profile is None
            if profile is None:
                profile = Profile.empty(account_id, id=self._ids.new_id())
                logger.info("Created missing profile for account %s", account_id)
            elif profile.is_deleted:
                raise ProfileNotFoundError(account_id)

            if profile.apply(update) or created:
                await uow.profiles.save(profile)
                logger.debug("Updated profile of account %s", account_id)
            return profile

        return await self._runner.run(work, timeout, "update_profile")

    async def soft_delete_profile(self, account_id: str, timeout: float | None = None) -> None:
        async def work(uow: IdentityUnitOfWork) -> None:
            profile = await self._get_profile(uow, account_id)
            if profile.soft_delete():
                await uow.profiles.save(profile)
                logger.info("Soft-deleted profile of account %s", account_id)

        await self._runner.run(work, timeout, "soft_delete_profile")

    async def restore_profile(self, account_id: str, timeout: float | None = None) -> Profile:
        async def work(uow: IdentityUnitOfWork) -> Profile:
            account = await self._get_account(uow, account_id)
            account.ensure_not_deleted("restore profile")
            profile = await self._get_profile(uow, account_id)
            if profile.restore():
                await uow.profiles.save(profile)
                logger.info("Restored profile of account %s", account_id)
            return profile

        return await self._runner.run(work, timeout, "restore_profile")

    async def search_by_display_name(
        self,
        keyword: str,
        timeout: float | None = None,
    ) -> list[Profile]:
        """Substring search over display names; soft-deleted profiles are skipped."""
        keyword = (keyword or "").strip()
        if not keyword:
            return []

        async def work(uow: IdentityUnitOfWork) -> list[Profile]:
            return await uow.profiles.search_by_display_name(keyword)

        return await self._runner.run(work, timeout, "search_by_display_name")

    async def _get_account(self, uow: IdentityUnitOfWork, account_id: str) -> Account:
        account = await uow.accounts.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account

    async def _get_profile(self, uow: IdentityUnitOfWork, account_id: str) -> Profile:
        await self._get_account(uow, account_id)
        profile = await uow.profiles.find_by_account_id(account_id)
        if profile is None:
            raise ProfileNotFoundError(account_id)
        return profile
