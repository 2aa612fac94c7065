"""Read-only account lookups."""

import logging
from typing import Union

from tessera_identity.application.ports import IdentityStore, IdentityUnitOfWork
from tessera_identity.application.services.transaction_runner import (
    TransactionRunner,
)
from tessera_identity.domain.account import (
    Account,
    AccountNotFoundError,
    AccountStatus,
    Email,
    OAuthProvider,
)
from tessera_identity.domain.account.entities.linked_identity import (
    normalize_provider_account_id,
)

logger = logging.getLogger(__name__)


class AccountQueryService:
    """Query side of the account graph.

    Single-entity lookups raise AccountNotFoundError; list and search
    methods return an empty list when nothing matches.
    """

    def __init__(
        self,
        store: IdentityStore,
        default_timeout: float | None = None,
        transient_retries: int = TransactionRunner.DEFAULT_TRANSIENT_RETRIES,
    ):
        self._runner = TransactionRunner(store, default_timeout, transient_retries)

    async def get_by_id(self, account_id: str, timeout: float | None = None) -> Account:
        async def work(uow: IdentityUnitOfWork) -> Account:
            account = await uow.accounts.find_by_id(account_id)
            if account is None:
                raise AccountNotFoundError(account_id)
            return account

        return await self._runner.run(work, timeout, "get_by_id")

    async def get_by_primary_email(
        self,
        email: Union[str, Email],
        timeout: float | None = None,
    ) -> Account:
        """Look up the non-deleted account holding the email."""
        email_obj = Email.of(email)

        async def work(uow: IdentityUnitOfWork) -> Account:
            account = await uow.accounts.find_active_by_email(email_obj)
            if account is None:
                raise AccountNotFoundError(email_obj.value)
            return account

        return await self._runner.run(work, timeout, "get_by_primary_email")

    async def get_by_provider_account(
        self,
        provider: Union[str, OAuthProvider],
        provider_account_id: str,
        timeout: float | None = None,
    ) -> Account:
        provider_enum = OAuthProvider.parse(provider)
        external_id = normalize_provider_account_id(provider_account_id)

        async def work(uow: IdentityUnitOfWork) -> Account:
            account = await uow.accounts.find_by_provider_account(provider_enum, external_id)
            if account is None:
                raise AccountNotFoundError(f"{provider_enum.value}:{external_id}")
            return account

        return await self._runner.run(work, timeout, "get_by_provider_account")

    async def list_active(self, timeout: float | None = None) -> list[Account]:
        return await self.list_by_status(AccountStatus.ACTIVE, timeout)

    async def list_active_verified(self, timeout: float | None = None) -> list[Account]:
        async def work(uow: IdentityUnitOfWork) -> list[Account]:
            return await uow.accounts.list_active_verified()

        return await self._runner.run(work, timeout, "list_active_verified")

    async def list_by_status(
        self,
        status: Union[str, AccountStatus],
        timeout: float | None = None,
    ) -> list[Account]:
        target = AccountStatus.parse(status)

        async def work(uow: IdentityUnitOfWork) -> list[Account]:
            return await uow.accounts.list_by_status(target)

        return await self._runner.run(work, timeout, "list_by_status")

    async def search_by_email(
        self,
        keyword: str,
        timeout: float | None = None,
    ) -> list[Account]:
        """Case-insensitive substring match over primary emails, all statuses."""
        keyword = (keyword or "").strip()
        if not keyword:
            return []

        async def work(uow: IdentityUnitOfWork) -> list[Account]:
            return await uow.accounts.search_by_email(keyword)

        results = await self._runner.run(work, timeout, "search_by_email")
        logger.debug("Email search '%s' matched %d account(s)", keyword, len(results))
        return results

    async def count(self, timeout: float | None = None) -> int:
        async def work(uow: IdentityUnitOfWork) -> int:
            return await uow.accounts.count()

        return await self._runner.run(work, timeout, "count")
