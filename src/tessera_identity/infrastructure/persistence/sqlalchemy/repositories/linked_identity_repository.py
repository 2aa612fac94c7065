"""SQLAlchemy implementation of LinkedIdentityRepository."""

import logging
from typing import Optional

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tessera_identity.domain.account import (
    LinkedIdentity,
    LinkedIdentityRepository,
    LinkStatus,
    OAuthProvider,
    ProviderAlreadyLinkedError,
    ProviderLinkAlreadyExistsError,
)
from tessera_identity.domain.shared.time import ensure_tz_aware
from tessera_identity.infrastructure.persistence.sqlalchemy.models import (
    LinkedIdentityModel,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.repositories._utils import (
    is_unique_violation,
)

logger = logging.getLogger(__name__)


class LinkedIdentityRepositorySQLAlchemy(LinkedIdentityRepository):
    """SQLAlchemy implementation of the LinkedIdentityRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_provider_account(
        self,
        provider: OAuthProvider,
        provider_account_id: str,
    ) -> Optional[LinkedIdentity]:
        model = await self._find_model_by_provider_account(provider, provider_account_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def exists_by_provider_account(
        self,
        provider: OAuthProvider,
        provider_account_id: str,
    ) -> bool:
        stmt = (
            select(func.count())
            .select_from(LinkedIdentityModel)
            .where(
                LinkedIdentityModel.provider == provider.value,
                LinkedIdentityModel.provider_account_id == provider_account_id,
            )
        )
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0

    async def find_current_by_account_and_provider(
        self,
        account_id: str,
        provider: OAuthProvider,
    ) -> Optional[LinkedIdentity]:
        stmt = select(LinkedIdentityModel).where(
            LinkedIdentityModel.account_id == account_id,
            LinkedIdentityModel.provider == provider.value,
            LinkedIdentityModel.status != LinkStatus.REVOKED.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def list_by_account(self, account_id: str) -> list[LinkedIdentity]:
        stmt = (
            select(LinkedIdentityModel)
            .where(LinkedIdentityModel.account_id == account_id)
            .order_by(LinkedIdentityModel.created_at, LinkedIdentityModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def list_active_by_account(self, account_id: str) -> list[LinkedIdentity]:
        stmt = (
            select(LinkedIdentityModel)
            .where(
                LinkedIdentityModel.account_id == account_id,
                LinkedIdentityModel.status == LinkStatus.ACTIVE.value,
            )
            .order_by(LinkedIdentityModel.created_at, LinkedIdentityModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def save(self, linked_identity: LinkedIdentity) -> None:
        existing = await self._find_model_by_id(linked_identity.id)

        try:
            if existing:
                self._update_model(existing, linked_identity)
                logger.debug("Updated linked identity: %s", linked_identity.id)
            else:
                model = LinkedIdentityModel(
                    id=linked_identity.id,
                    account_id=linked_identity.account_id,
                    provider=linked_identity.provider.value,
                    provider_account_id=linked_identity.provider_account_id,
                    created_at=linked_identity.created_at,
                )
                self._update_model(model, linked_identity)
                self._session.add(model)
                logger.debug("Inserted linked identity: %s", linked_identity.id)

            await self._session.flush()
        except IntegrityError as e:
            if is_unique_violation(e, "provider_account_id"):
                raise ProviderLinkAlreadyExistsError(
                    linked_identity.provider.value,
                    linked_identity.provider_account_id,
                ) from e
            if is_unique_violation(e, "provider"):
                raise ProviderAlreadyLinkedError(
                    linked_identity.account_id,
                    linked_identity.provider.value,
                ) from e
            raise

    async def delete_by_account_id(self, account_id: str) -> int:
        stmt = delete(LinkedIdentityModel).where(
            LinkedIdentityModel.account_id == account_id,
        )
        result = await self._session.execute(stmt)
        return result.rowcount

    async def _find_model_by_id(self, linked_identity_id: str) -> Optional[LinkedIdentityModel]:
        stmt = select(LinkedIdentityModel).where(LinkedIdentityModel.id == linked_identity_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    async def _find_model_by_provider_account(
        self,
        provider: OAuthProvider,
        provider_account_id: str,
    ) -> Optional[LinkedIdentityModel]:
        stmt = select(LinkedIdentityModel).where(
            LinkedIdentityModel.provider == provider.value,
            LinkedIdentityModel.provider_account_id == provider_account_id,
        )
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: LinkedIdentityModel) -> LinkedIdentity:
        return LinkedIdentity(
            id=model.id,
            account_id=model.account_id,
            provider=OAuthProvider(model.provider),
            provider_account_id=model.provider_account_id,
            status=LinkStatus(model.status),
            provider_email=model.provider_email,
            provider_name=model.provider_name,
            provider_picture=model.provider_picture,
            access_token=model.access_token,
            refresh_token=model.refresh_token,
            token_expires_at=ensure_tz_aware(model.token_expires_at),
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _update_model(self, model: LinkedIdentityModel, linked: LinkedIdentity) -> None:
        model.status = linked.status.value
        model.provider_email = linked.provider_email
        model.provider_name = linked.provider_name
        model.provider_picture = linked.provider_picture
        model.access_token = linked.access_token
        model.refresh_token = linked.refresh_token
        model.token_expires_at = linked.token_expires_at
        model.updated_at = linked.updated_at
