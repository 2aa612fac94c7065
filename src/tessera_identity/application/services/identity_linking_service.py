"""Identity linking: reconcile external identity assertions with accounts."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Optional, Union

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
    Email,
    InvalidEmailError,
    LinkedIdentity,
    LinkedIdentityNotFoundError,
    OAuthProvider,
    Profile,
    ProviderAlreadyLinkedError,
)
from tessera_identity.domain.account.entities.linked_identity import (
    normalize_provider_account_id,
)
from tessera_identity.domain.shared.exceptions import ConflictError
from tessera_identity.domain.shared.identifiers import UuidIdGenerator

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SocialAssertion:
    """An identity assertion received from a provider callback.

    The provider and its account id are validated up front. The email is
    only needed when the provider pair is not linked yet, so it is checked
    lazily through ``require_email``: returning users may log in without one.
    """

    provider: OAuthProvider
    provider_account_id: str
    provider_email: Optional[str] = None
    name: Optional[str] = None
    picture: Optional[str] = None

    @classmethod
    def build(  # NOQA: PLR0913
        cls,
        provider: Union[str, OAuthProvider],
        provider_account_id: str,
        provider_email: Optional[str],
        provider_name: Optional[str] = None,
        provider_picture: Optional[str] = None,
    ) -> "SocialAssertion":
        """Validate raw callback values.

        Raises
        ------
        InvalidProviderError
            If the provider is not supported
        InvalidProviderAccountIdError
            If the provider account id is blank or too long
        """
        return cls(
            provider=OAuthProvider.parse(provider),
            provider_account_id=normalize_provider_account_id(provider_account_id),
            provider_email=(provider_email or "").strip() or None,
            name=(provider_name or "").strip() or None,
            picture=(provider_picture or "").strip() or None,
        )

    def require_email(self) -> Email:
        """The provider email, raising InvalidEmailError when missing or malformed."""
        return Email(self.provider_email or "")

    @property
    def email_hint(self) -> Optional[str]:
        """The provider email if it is usable, for refreshing cached hints."""
        if self.provider_email is None:
            return None
        try:
            return Email(self.provider_email).value
        except InvalidEmailError:
            return None


class IdentityLinkingService:
    """Links external provider identities to accounts.

    ``resolve_social_identity`` is the single entry point for provider
    callbacks. Resolution order:

    1. Known provider pair: return its account (reactivating a revoked
       link on the way)
    2. Non-deleted account with the provider email: attach a new link
    3. Otherwise: create account, profile and link together

    All three steps share one unit of work. When concurrent callbacks for
    the same user race, the loser hits a storage uniqueness constraint,
    its unit of work rolls back, and resolution starts over once from
    step 1, where it finds what the winner committed. An account that
    already holds another current link for the provider is a settled
    conflict and is raised without a second attempt.
    """

    RACE_RETRIES = 1

    def __init__(
        self,
        store: IdentityStore,
        id_generator: IdGenerator | None = None,
        default_timeout: float | None = None,
        transient_retries: int = TransactionRunner.DEFAULT_TRANSIENT_RETRIES,
    ):
        self._runner = TransactionRunner(store, default_timeout, transient_retries)
        self._ids = id_generator or UuidIdGenerator()

    async def resolve_social_identity(  # NOQA: PLR0913
        self,
        provider: Union[str, OAuthProvider],
        provider_account_id: str,
        provider_email: Optional[str],
        provider_name: Optional[str] = None,
        provider_picture: Optional[str] = None,
        timeout: float | None = None,
    ) -> Account:
        """Return the account for a provider identity, creating or linking as needed.

        Idempotent: repeated calls with the same arguments return the same
        account and never create a second account or link.
        """
        assertion = SocialAssertion.build(
            provider,
            provider_account_id,
            provider_email,
            provider_name,
            provider_picture,
        )

        async def work(uow: IdentityUnitOfWork) -> Account:
            return await self._resolve(uow, assertion)

        attempt = 0
        while True:
            try:
                return await self._runner.run(work, timeout, "resolve_social_identity")
            except ConflictError as e:
                if attempt >= self.RACE_RETRIES or not self._is_race(e):
                    raise
                attempt += 1
                logger.warning(
                    "Conflict while resolving %s/%s (%s), re-reading",
                    assertion.provider.value,
                    assertion.provider_account_id,
                    e.code.value,
                )

    async def unlink(
        self,
        account_id: str,
        provider: Union[str, OAuthProvider],
        timeout: float | None = None,
    ) -> LinkedIdentity:
        """Revoke the account's link for a provider. The row is kept."""
        provider_enum = OAuthProvider.parse(provider)

        async def work(uow: IdentityUnitOfWork) -> LinkedIdentity:
            await self._get_account(uow, account_id)
            linked = await uow.linked_identities.find_current_by_account_and_provider(
                account_id,
                provider_enum,
            )
            if linked is None:
                raise LinkedIdentityNotFoundError(account_id, provider_enum.value)

            linked.revoke()
            await uow.linked_identities.save(linked)
            logger.info(
                "Unlinked %s identity %s from account %s",
                provider_enum.value,
                linked.provider_account_id,
                account_id,
            )
            return linked

        return await self._runner.run(work, timeout, "unlink")

    async def list_linked_identities(
        self,
        account_id: str,
        timeout: float | None = None,
    ) -> list[LinkedIdentity]:
        """All links of an account, revoked ones included."""

        async def work(uow: IdentityUnitOfWork) -> list[LinkedIdentity]:
            await self._get_account(uow, account_id)
            return await uow.linked_identities.list_by_account(account_id)

        return await self._runner.run(work, timeout, "list_linked_identities")

    async def list_active_linked_identities(
        self,
        account_id: str,
        timeout: float | None = None,
    ) -> list[LinkedIdentity]:
        async def work(uow: IdentityUnitOfWork) -> list[LinkedIdentity]:
            await self._get_account(uow, account_id)
            return await uow.linked_identities.list_active_by_account(account_id)

        return await self._runner.run(work, timeout, "list_active_linked_identities")

    async def update_provider_tokens(  # NOQA: PLR0913
        self,
        account_id: str,
        provider: Union[str, OAuthProvider],
        access_token: Optional[str],
        refresh_token: Optional[str],
        expires_at: Optional[datetime],
        timeout: float | None = None,
    ) -> LinkedIdentity:
        """Store fresh provider token material on the account's current link."""
        provider_enum = OAuthProvider.parse(provider)

        async def work(uow: IdentityUnitOfWork) -> LinkedIdentity:
            await self._get_account(uow, account_id)
            linked = await uow.linked_identities.find_current_by_account_and_provider(
                account_id,
                provider_enum,
            )
            if linked is None:
                raise LinkedIdentityNotFoundError(account_id, provider_enum.value)

            linked.update_tokens(access_token, refresh_token, expires_at)
            await uow.linked_identities.save(linked)
            logger.debug("Updated %s tokens for account %s", provider_enum.value, account_id)
            return linked

        return await self._runner.run(work, timeout, "update_provider_tokens")

    async def _resolve(self, uow: IdentityUnitOfWork, assertion: SocialAssertion) -> Account:
        linked = await uow.linked_identities.find_by_provider_account(
            assertion.provider,
            assertion.provider_account_id,
        )
        if linked is not None:
            return await self._resolve_known_link(uow, linked, assertion)

        email = assertion.require_email()
        account = await uow.accounts.find_active_by_email(email)
        if account is not None:
            await self._attach(uow, account, assertion, email)
            return account

        return await self._create_from_assertion(uow, assertion, email)

    async def _resolve_known_link(
        self,
        uow: IdentityUnitOfWork,
        linked: LinkedIdentity,
        assertion: SocialAssertion,
    ) -> Account:
        account = await self._get_account(uow, linked.account_id)
        if not linked.is_revoked:
            return account

        # Revoked pair: it stays bound to its first account, so bring it back
        account.ensure_not_deleted(f"reactivate {assertion.provider.value} link")
        await self._ensure_provider_slot_free(uow, account, assertion.provider)

        linked.reactivate(assertion.email_hint, assertion.name, assertion.picture)
        await uow.linked_identities.save(linked)
        logger.info(
            "Reactivated %s identity %s for account %s",
            assertion.provider.value,
            assertion.provider_account_id,
            account.id,
        )
        return account

    async def _attach(
        self,
        uow: IdentityUnitOfWork,
        account: Account,
        assertion: SocialAssertion,
        email: Email,
    ) -> LinkedIdentity:
        # email_verified is left alone: only creation trusts the provider
        await UniquenessIndex(uow).require_provider_link(
            assertion.provider,
            assertion.provider_account_id,
        )
        await self._ensure_provider_slot_free(uow, account, assertion.provider)

        profile = await uow.profiles.find_by_account_id(account.id)
        if profile is None:
            profile = Profile.from_provider_hints(
                account.id,
                assertion.name,
                assertion.picture,
                id=self._ids.new_id(),
            )
            await uow.profiles.save(profile)
            logger.info("Created missing profile for account %s", account.id)

        linked = self._new_link(account, assertion, email)
        await uow.linked_identities.save(linked)
        logger.info(
            "Linked %s identity %s to existing account %s",
            assertion.provider.value,
            assertion.provider_account_id,
            account.id,
        )
        return linked

    async def _create_from_assertion(
        self,
        uow: IdentityUnitOfWork,
        assertion: SocialAssertion,
        email: Email,
    ) -> Account:
        index = UniquenessIndex(uow)
        await index.require_email(email)
        await index.require_provider_link(assertion.provider, assertion.provider_account_id)

        account = Account.create(
            email,
            id=self._ids.new_id(),
            email_verified=True,
        )
        await uow.accounts.save(account)

        profile = Profile.from_provider_hints(
            account.id,
            assertion.name,
            assertion.picture,
            id=self._ids.new_id(),
        )
        await uow.profiles.save(profile)

        await uow.linked_identities.save(self._new_link(account, assertion, email))

        logger.info(
            "Created account %s from %s identity %s",
            account.id,
            assertion.provider.value,
            assertion.provider_account_id,
        )
        return account

    def _new_link(
        self,
        account: Account,
        assertion: SocialAssertion,
        email: Email,
    ) -> LinkedIdentity:
        return LinkedIdentity.link(
            account_id=account.id,
            provider=assertion.provider,
            provider_account_id=assertion.provider_account_id,
            provider_email=email.value,
            provider_name=assertion.name,
            provider_picture=assertion.picture,
            id=self._ids.new_id(),
        )

    @staticmethod
    def _is_race(error: ConflictError) -> bool:
        # The provider slot check reads committed links; re-reading gives the
        # same answer. Every other conflict here means a concurrent commit
        # landed between our reads and our writes.
        if isinstance(error, ProviderAlreadyLinkedError):
            return error.rejected_by_storage
        return True

    async def _ensure_provider_slot_free(
        self,
        uow: IdentityUnitOfWork,
        account: Account,
        provider: OAuthProvider,
    ) -> None:
        current = await uow.linked_identities.find_current_by_account_and_provider(
            account.id,
            provider,
        )
        if current is not None:
            raise ProviderAlreadyLinkedError(account.id, provider.value)

    async def _get_account(self, uow: IdentityUnitOfWork, account_id: str) -> Account:
        account = await uow.accounts.find_by_id(account_id)
        if account is None:
            raise AccountNotFoundError(account_id)
        return account
