"""SQLAlchemy implementation of ProfileRepository."""

import logging
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from tessera_identity.domain.account import Gender, Profile, ProfileRepository
from tessera_identity.domain.shared.time import ensure_tz_aware
from tessera_identity.infrastructure.persistence.sqlalchemy.models import ProfileModel
from tessera_identity.infrastructure.persistence.sqlalchemy.repositories._utils import (
    LIKE_ESCAPE,
    contains_pattern,
)

logger = logging.getLogger(__name__)

# Columns copied one-to-one between Profile and ProfileModel
_PLAIN_FIELDS = (
    "display_name",
    "full_name",
    "birth_date",
    "phone_number",
    "address",
    "profile_image_url",
    "bio",
    "website_url",
    "location",
)


class ProfileRepositorySQLAlchemy(ProfileRepository):
    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def find_by_account_id(self, account_id: str) -> Optional[Profile]:
        model = await self._find_model_by_account_id(account_id)
        if model is None:
            return None
        return self._map_to_domain(model)

    async def save(self, profile: Profile) -> None:
        existing = await self._find_model_by_account_id(profile.account_id)

        if existing:
            self._update_model(existing, profile)
            logger.debug("Updated profile for account: %s", profile.account_id)
        else:
            model = ProfileModel(id=profile.id, account_id=profile.account_id)
            self._update_model(model, profile)
            model.created_at = profile.created_at
            self._session.add(model)
            logger.debug("Inserted profile for account: %s", profile.account_id)

        await self._session.flush()

    async def delete_by_account_id(self, account_id: str) -> int:
        stmt = delete(ProfileModel).where(ProfileModel.account_id == account_id)
        result = await self._session.execute(stmt)
        return result.rowcount

    async def search_by_display_name(self, keyword: str) -> list[Profile]:
        stmt = (
            select(ProfileModel)
            .where(
                ProfileModel.deleted_at.is_(None),
                ProfileModel.display_name.ilike(
                    contains_pattern(keyword),
                    escape=LIKE_ESCAPE,
                ),
            )
            .order_by(ProfileModel.display_name, ProfileModel.created_at)
        )
        result = await self._session.execute(stmt)
        return [self._map_to_domain(model) for model in result.scalars().all()]

    async def _find_model_by_account_id(self, account_id: str) -> Optional[ProfileModel]:
        stmt = select(ProfileModel).where(ProfileModel.account_id == account_id)
        result = await self._session.execute(stmt)
        return result.scalar_one_or_none()

    def _map_to_domain(self, model: ProfileModel) -> Profile:
        return Profile(
            id=model.id,
            account_id=model.account_id,
            gender=Gender(model.gender) if model.gender else None,
            deleted_at=ensure_tz_aware(model.deleted_at),
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
            **{name: getattr(model, name) for name in _PLAIN_FIELDS},
        )

    def _update_model(self, model: ProfileModel, profile: Profile) -> None:
        for name in _PLAIN_FIELDS:
            setattr(model, name, getattr(profile, name))
        model.gender = profile.gender.value if profile.gender else None
        model.deleted_at = profile.deleted_at
        model.updated_at = profile.updated_at
