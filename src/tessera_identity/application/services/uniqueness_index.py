"""Uniqueness checks for primary emails and provider links."""

import logging
from typing import Optional, Union

from tessera_identity.application.ports import IdentityUnitOfWork
from tessera_identity.domain.account import (
    Email,
    EmailAlreadyExistsError,
    OAuthProvider,
    ProviderLinkAlreadyExistsError,
)

logger = logging.getLogger(__name__)


class UniquenessIndex:
    """Guards the two global uniqueness rules of the identity graph.

    - a primary email belongs to at most one non-deleted account
    - a (provider, provider_account_id) pair belongs to at most one row,
      whatever its status

    The index answers inside the caller's unit of work. A positive answer
    holds the key for that unit of work: the row written next is checked
    again by the storage constraint, which stays authoritative when two
    transactions race past this check. Repositories translate such
    constraint violations into the same ConflictError subclasses raised
    here, and the enclosing transaction rolls back with no partial write.
    """

    def __init__(self, uow: IdentityUnitOfWork):
        self._uow = uow

    async def reserve_email(
        self,
        email: Union[str, Email],
        exclude_account_id: Optional[str] = None,
    ) -> bool:
        taken = await self._uow.accounts.exists_active_by_email(
            Email.of(email),
            exclude_account_id=exclude_account_id,
        )
        return not taken

    async def reserve_provider_link(
        self,
        provider: OAuthProvider,
        provider_account_id: str,
    ) -> bool:
        taken = await self._uow.linked_identities.exists_by_provider_account(
            provider,
            provider_account_id,
        )
        return not taken

    async def require_email(
        self,
        email: Union[str, Email],
        exclude_account_id: Optional[str] = None,
    ) -> None:
        email_obj = Email.of(email)
        if not await self.reserve_email(email_obj, exclude_account_id):
            logger.debug("Email reservation refused: %s", email_obj.value)
            raise EmailAlreadyExistsError(email_obj.value)

    async def require_provider_link(
        self,
        provider: OAuthProvider,
        provider_account_id: str,
    ) -> None:
        if not await self.reserve_provider_link(provider, provider_account_id):
            logger.debug(
                "Provider link reservation refused: %s/%s",
                provider.value,
                provider_account_id,
            )
            raise ProviderLinkAlreadyExistsError(provider.value, provider_account_id)
