"""Account lifecycle: registration, status changes, email changes, deletion."""

import logging
from typing import Union

from tessera_identity.application.ports import (
    IdentityStore,
    IdentityUnitOfWork,
    IdGenerator,
)
from tessera_identity.application.services.transaction_runner import (
    TransactionRunner,
)
from tessera_identity.application.services.uniqueness_index import UniquenessIndex
from tessera_identity.domain.account import (
    Account,
    AccountNotFoundError,
    AccountStatus,
    Email,
    Profile,
)
from tessera_identity.domain.shared.identifiers import UuidIdGenerator

logger = logging.getLogger(__name__)


class AccountLifecycleService:
    """Creates accounts and moves them through their lifecycle.

    Every public method runs in its own unit of work. Deleted accounts
    can only be purged: any other mutation raises InvalidTransitionError.
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

    async def create_account(
        self,
        primary_email: Union[str, Email],
        timeout: float | None = None,
    ) -> Account:
        """Register a new account with an empty profile.

        Raises
        ------
        InvalidEmailError
            If the email is malformed
        EmailAlreadyExistsError
            If a non-deleted account already uses the email
        """
        email = Email.of(primary_email)

        async def work(uow: IdentityUnitOfWork) -> Account:
            await UniquenessIndex(uow).require_email(email)

            account = Account.create(email, id=self._ids.new_id())
            await uow.accounts.save(account)
            await uow.profiles.save(Profile.empty(account.id, id=self._ids.new_id()))

            logger.info("Created account %s (email: %s)", account.id, account.primary_email)
            return account

        return await self._runner.run(work, timeout, "create_account")

    async def change_status(
        self,
        account_id: str,
        new_status: Union[str, AccountStatus],
        timeout: float | None = None,
    ) -> Account:
        target = AccountStatus.parse(new_status)

        async def work(uow: IdentityUnitOfWork) -> Account:
            account = await self._get_account(uow, account_id)
            previous = account.status
            if account.change_status(target):
                await uow.accounts.save(account)
                logger.info(
                    "Account %s status changed: %s -> %s",
                    account.id,
                    previous.value,
                    target.value,
                )
            return account

        return await self._runner.run(work, timeout, "change_status")

    async def soft_delete(self, account_id: str, timeout: float | None = None) -> None:
        """Mark an account DELETED without removing any rows.

        The primary email becomes available to other accounts. Deleting an
        already deleted account is a no-op.
        """

        async def work(uow: IdentityUnitOfWork) -> None:
            account = await self._get_account(uow, account_id)
            if not account.mark_deleted():
                logger.debug("Account %s already deleted", account_id)
                return
            await uow.accounts.save(account)
            logger.info("Soft-deleted account %s", account_id)

        await self._runner.run(work, timeout, "soft_delete")

    async def hard_delete(self, account_id: str, timeout: float | None = None) -> None:
        """Permanently remove an account, its profile and its linked identities."""

        async def work(uow: IdentityUnitOfWork) -> None:
            await self._get_account(uow, account_id)

            # Dependants first
            links_removed = await uow.linked_identities.delete_by_account_id(account_id)
            profiles_removed = await uow.profiles.delete_by_account_id(account_id)
            await uow.accounts.delete(account_id)

            logger.info(
                "Purged account %s (%d linked identities, %d profile)",
                account_id,
                links_removed,
                profiles_removed,
            )

        await self._runner.run(work, timeout, "hard_delete")

    async def update_primary_email(
        self,
        account_id: str,
        new_email: Union[str, Email],
        timeout: float | None = None,
    ) -> Account:
        """Change the primary email; the new address starts unverified."""
        email = Email.of(new_email)

        async def work(uow: IdentityUnitOfWork) -> Account:
            account = await self._get_account(uow, account_id)
            if account.email_obj == email:
                return account

            account.ensure_not_deleted("change primary email")
            await UniquenessIndex(uow).require_email(email, exclude_account_id=account.id)

            account.change_primary_email(email)
            await uow.accounts.save(account)
            logger.info("Account %s primary email changed to %s", account.id, email.value)
            return account

        return await self._runner.run(work, timeout, "update_primary_email")

    async def set_email_verified(
        self,
        account_id: str,
        verified: bool,
        timeout: float | None = None,
    ) -> Account:
        async def work(uow: IdentityUnitOfWork) -> Account:
            account = await self._get_account(uow, account_id)
            account.set_email_verified(verified)
            await uow.accounts.save(account)
            logger.debug("Account %s email_verified=%s", account.id, verified)
            return account

        return await self._runner.run(work, timeout, "set_email_verified")

    async def _get_account(self, uow: IdentityUnitOfWork, account_id: str) -> Account:
        account = await uow.accounts.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account
