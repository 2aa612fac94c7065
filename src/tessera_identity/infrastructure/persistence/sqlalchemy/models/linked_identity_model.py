"""SQLAlchemy model for linked provider identities."""

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime, ForeignKey, Index, String, UniqueConstraint, text
from sqlalchemy.orm import Mapped, mapped_column

from tessera_identity.domain.account.entities.linked_identity import (
    MAX_PROVIDER_ACCOUNT_ID_LENGTH,
    MAX_PROVIDER_EMAIL_LENGTH,
    MAX_PROVIDER_NAME_LENGTH,
    MAX_PROVIDER_PICTURE_LENGTH,
    MAX_TOKEN_LENGTH,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.base import (
    Base,
    TimestampMixin,
)

_CURRENT_LINK = text("status <> 'REVOKED'")


class LinkedIdentityModel(Base, TimestampMixin):
    """SQLAlchemy model for persisting LinkedIdentity entities.

    - (provider, provider_account_id) is unique across all rows, revoked
      ones included
    - an account holds at most one non-revoked row per provider
    """

    __tablename__ = "linked_identities"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    account_id: Mapped[str] = mapped_column(
        String(64),
        ForeignKey("accounts.id"),
        nullable=False,
        index=True,
    )
    provider: Mapped[str] = mapped_column(String(20), nullable=False)
    provider_account_id: Mapped[str] = mapped_column(
        String(MAX_PROVIDER_ACCOUNT_ID_LENGTH),
        nullable=False,
    )
    status: Mapped[str] = mapped_column(String(20), default="ACTIVE", nullable=False)
    provider_email: Mapped[Optional[str]] = mapped_column(
        String(MAX_PROVIDER_EMAIL_LENGTH),
        nullable=True,
    )
    provider_name: Mapped[Optional[str]] = mapped_column(
        String(MAX_PROVIDER_NAME_LENGTH),
        nullable=True,
    )
    provider_picture: Mapped[Optional[str]] = mapped_column(
        String(MAX_PROVIDER_PICTURE_LENGTH),
        nullable=True,
    )
    access_token: Mapped[Optional[str]] = mapped_column(
        String(MAX_TOKEN_LENGTH),
        nullable=True,
    )
    refresh_token: Mapped[Optional[str]] = mapped_column(
        String(MAX_TOKEN_LENGTH),
        nullable=True,
    )
    token_expires_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True),
        nullable=True,
    )

    __table_args__ = (
        UniqueConstraint(
            "provider",
            "provider_account_id",
            name="uq_linked_identities_provider_account_id",
        ),
        Index(
            "uq_linked_identities_account_provider_current",
            "account_id",
            "provider",
            unique=True,
            postgresql_where=_CURRENT_LINK,
            sqlite_where=_CURRENT_LINK,
        ),
    )

    def __repr__(self) -> str:
        return (
            f"<LinkedIdentityModel(id={self.id}, provider={self.provider}, "
            f"provider_account_id={self.provider_account_id}, status={self.status})>"
        )
