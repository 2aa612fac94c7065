"""SQLAlchemy model for account profiles."""

from datetime import date, datetime
from typing import Optional

from sqlalchemy import Date, DateTime, ForeignKey, String
from sqlalchemy.orm import Mapped, mapped_column

from tessera_identity.domain.account.entities.profile import PROFILE_FIELD_LIMITS
from tessera_identity.infrastructure.persistence.sqlalchemy.base import (
    Base,
    TimestampMixin,
)


class ProfileModel(Base, TimestampMixin):
    """One row per account. Removed explicitly before its account."""

    __tablename__ = "profiles"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    account_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("accounts.id"),
        unique=True,
        nullable=False,
    )
    display_name: Mapped[Optional[str]] = mapped_column(
        String(PROFILE_FIELD_LIMITS["display_name"]),
        nullable=True,
        index=True,
    )
    full_name: Mapped[Optional[str]] = mapped_column(
        String(PROFILE_FIELD_LIMITS["full_name"]),
        nullable=True,
    )
    birth_date: Mapped[Optional[date]] = mapped_column(Date, nullable=True)
    gender: Mapped[Optional[str]] = mapped_column(String(20), nullable=True)
    phone_number: Mapped[Optional[str]] = mapped_column(
        String(PROFILE_FIELD_LIMITS["phone_number"]),
        nullable=True,
    )
    address: Mapped[Optional[str]] = mapped_column(
        String(PROFILE_FIELD_LIMITS["address"]),
        nullable=True,
    )
    profile_image_url: Mapped[Optional[str]] = mapped_column(
        String(PROFILE_FIELD_LIMITS["profile_image_url"]),
        nullable=True,
    )
    bio: Mapped[Optional[str]] = mapped_column(
        String(PROFILE_FIELD_LIMITS["bio"]),
        nullable=True,
    )
    website_url: Mapped[Optional[str]] = mapped_column(
        String(PROFILE_FIELD_LIMITS["website_url"]),
        nullable=True,
    )
    location: Mapped[Optional[str]] = mapped_column(
        String(PROFILE_FIELD_LIMITS["location"]),
        nullable=True,
    )
    deleted_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    def __repr__(self) -> str:
        return f"<ProfileModel(id={self.id}, account_id={self.account_id})>"
