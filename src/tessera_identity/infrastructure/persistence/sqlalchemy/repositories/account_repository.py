"""SQLAlchemy implementation of AccountRepository."""

import logging
from typing import Optional, Union

from sqlalchemy import delete, func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from tessera_identity.domain.account import (
    Account,
    AccountRepository,
    AccountStatus,
    Email,
    EmailAlreadyExistsError,
    OAuthProvider,
)
from tessera_identity.domain.shared.time import ensure_tz_aware
from tessera_identity.infrastructure.persistence.sqlalchemy.models import (
    AccountModel,
    LinkedIdentityModel,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.repositories._utils import (
    LIKE_ESCAPE,
    contains_pattern,
    is_unique_violation,
)

logger = logging.getLogger(__name__)


class AccountRepositorySQLAlchemy(AccountRepository):
    """SQLAlchemy implementation of the AccountRepository interface."""

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_id(self, account_id: str) -> Optional[Account]:
        model = await self._find_model_by_id(account_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def find_active_by_email(self, email: Union[str, Email]) -> Optional[Account]:
        email_value = Email.of(email).value

        stmt = select(AccountModel).where(
            AccountModel.primary_email == email_value,
            AccountModel.status != AccountStatus.DELETED.value,
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def exists_active_by_email(
        self,
        email: Union[str, Email],
        exclude_account_id: Optional[str] = None,
    ) -> bool:
        stmt = (
            select(func.count())
            .select_from(AccountModel)
            .where(
                AccountModel.primary_email == Email.of(email).value,
                AccountModel.status != AccountStatus.DELETED.value,
            )
        )
        if exclude_account_id is not None:
            stmt = stmt.where(AccountModel.id != exclude_account_id)
        result = await self._session.execute(stmt)
        return result.scalar_one() > 0

    async def find_by_provider_account(
        self,
        provider: OAuthProvider,
        provider_account_id: str,
    ) -> Optional[Account]:
        stmt = (
            select(AccountModel)
            .join(LinkedIdentityModel, LinkedIdentityModel.account_id == AccountModel.id)
            .where(
                LinkedIdentityModel.provider == provider.value,
                LinkedIdentityModel.provider_account_id == provider_account_id,
            )
        )
        result = await self._session.execute(stmt)
        model = result.scalar_one_or_none()

        if model is None:
            return None

        return self._map_to_domain(model)

    async def save(self, account: Account) -> None:
        existing = await self._find_model_by_id(account.id)

        try:
            if existing:
                self._update_model(existing, account)
                logger.debug("Updated account: %s", account.id)
            else:
                self._session.add(self._map_to_model(account))
                logger.debug("Inserted account: %s", account.id)

            await self._session.flush()
        except IntegrityError as e:
            if is_unique_violation(e, "primary_email"):
                raise EmailAlreadyExistsError(account.primary_email) from e
            raise

    async def delete(self, account_id: str) -> bool:
        stmt = delete(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        return result.rowcount > 0

    async def list_by_status(self, status: AccountStatus) -> list[Account]:
        stmt = (
            select(AccountModel)
            .where(AccountModel.status == status.value)
            .order_by(AccountModel.created_at, AccountModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def list_active_verified(self) -> list[Account]:
        stmt = (
            select(AccountModel)
            .where(
                AccountModel.status == AccountStatus.ACTIVE.value,
                AccountModel.email_verified.is_(True),
            )
            .order_by(AccountModel.created_at, AccountModel.id)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def search_by_email(self, keyword: str) -> list[Account]:
        stmt = (
            select(AccountModel)
            .where(
                AccountModel.primary_email.ilike(
                    contains_pattern(keyword.lower()),
                    escape=LIKE_ESCAPE,
                ),
            )
            .order_by(AccountModel.primary_email, AccountModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def count(self) -> int:
        stmt = select(func.count()).select_from(AccountModel)
        result = await self._session.execute(stmt)
        return result.scalar_one()

    async def _find_model_by_id(self, account_id: str) -> Optional[AccountModel]:
        stmt = select(AccountModel).where(AccountModel.id == account_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: AccountModel) -> Account:
        return Account.reconstitute(
            id=model.id,
            primary_email=model.primary_email,
            status=model.status,
            email_verified=model.email_verified,
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )

    def _map_to_model(self, account: Account) -> AccountModel:
        return AccountModel(
            id=account.id,
            primary_email=account.primary_email,
            email_verified=account.email_verified,
            status=account.status.value,
            created_at=account.created_at,
            updated_at=account.updated_at,
        )

    def _update_model(self, model: AccountModel, account: Account) -> None:
        model.primary_email = account.primary_email
        model.email_verified = account.email_verified
        model.status = account.status.value
        model.updated_at = account.updated_at
