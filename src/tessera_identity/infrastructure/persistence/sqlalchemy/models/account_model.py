"""SQLAlchemy model for the Account aggregate."""

from sqlalchemy import Boolean, Index, String, text
from sqlalchemy.orm import Mapped, mapped_column

from tessera_identity.infrastructure.persistence.sqlalchemy.base import (
    Base,
    TimestampMixin,
)

# Rows in this status no longer hold their primary email
_LIVE_ACCOUNT = text("status <> 'DELETED'")


class AccountModel(Base, TimestampMixin):
    """SQLAlchemy model for persisting Account aggregates.

    The partial unique index makes a primary email unique among accounts
    that are not DELETED, so a soft-deleted account frees its address.
    """

    __tablename__ = "accounts"

    id: Mapped[str] = mapped_column(String(64), primary_key=True)
    primary_email: Mapped[str] = mapped_column(String(255), nullable=False)
    email_verified: Mapped[bool] = mapped_column(
        Boolean,
        default=False,
        nullable=False,
    )
    status: Mapped[str] = mapped_column(
        String(20),
        default="ACTIVE",
        nullable=False,
        index=True,
    )

    __table_args__ = (
        Index(
            "uq_accounts_primary_email_live",
            "primary_email",
            unique=True,
            postgresql_where=_LIVE_ACCOUNT,
            sqlite_where=_LIVE_ACCOUNT,
        ),
        Index("ix_accounts_primary_email", "primary_email"),
    )

    def __repr__(self) -> str:
        return (
            f"<AccountModel(id={self.id}, primary_email={self.primary_email}, "
            f"status={self.status})>"
        )
