"""LinkedIdentity entity: one external provider identity tied to an account."""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional

from tessera_identity.domain.account.exceptions import InvalidProviderAccountIdError
from tessera_identity.domain.account.value_objects import LinkStatus, OAuthProvider
from tessera_identity.domain.shared.exceptions import ValidationFailedError
from tessera_identity.domain.shared.identifiers import new_identifier
from tessera_identity.domain.shared.time import utc_now

MAX_PROVIDER_ACCOUNT_ID_LENGTH = 255
MAX_PROVIDER_EMAIL_LENGTH = 255
MAX_PROVIDER_NAME_LENGTH = 100
MAX_PROVIDER_PICTURE_LENGTH = 500
MAX_TOKEN_LENGTH = 1000


def normalize_provider_account_id(provider_account_id: str | None) -> str:
    if provider_account_id is None or not str(provider_account_id).strip():
        msg = "Provider account id cannot be empty"
        raise InvalidProviderAccountIdError(msg)
    value = str(provider_account_id).strip()
    if len(value) > MAX_PROVIDER_ACCOUNT_ID_LENGTH:
        msg = (
            "Provider account id cannot exceed "
            f"{MAX_PROVIDER_ACCOUNT_ID_LENGTH} characters"
        )
        raise InvalidProviderAccountIdError(msg)
    return value


def _clip(value: str | None, limit: int) -> str | None:
    if not value:
        return None
    return value[:limit]


@dataclass
class LinkedIdentity:
    """A record tying an account to one provider-side identity.

    Provider email, name and picture are cached copies of what the
    provider asserted at link time. They are never authoritative.
    Rows are revoked on unlink, never removed, so the provider pair
    stays reserved for the account that first claimed it.
    """

    account_id: str
    provider: OAuthProvider
    provider_account_id: str
    id: str = field(default_factory=new_identifier)
    status: LinkStatus = LinkStatus.ACTIVE
    provider_email: Optional[str] = None
    provider_name: Optional[str] = None
    provider_picture: Optional[str] = None
    access_token: Optional[str] = None
    refresh_token: Optional[str] = None
    token_expires_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def link(  # NOQA: PLR0913
        cls,
        account_id: str,
        provider: OAuthProvider | str,
        provider_account_id: str,
        provider_email: str | None = None,
        provider_name: str | None = None,
        provider_picture: str | None = None,
        id: str | None = None,
    ) -> "LinkedIdentity":
        identity = cls(
            id=id or new_identifier(),
            account_id=account_id,
            provider=OAuthProvider.parse(provider),
            provider_account_id=normalize_provider_account_id(provider_account_id),
        )
        identity._cache_hints(provider_email, provider_name, provider_picture)
        return identity

    @property
    def is_active(self) -> bool:
        return self.status == LinkStatus.ACTIVE

    @property
    def is_revoked(self) -> bool:
        return self.status == LinkStatus.REVOKED

    def revoke(self) -> bool:
        if self.is_revoked:
            return False
        self.status = LinkStatus.REVOKED
        self.updated_at = utc_now()
        return True

    def reactivate(
        self,
        provider_email: str | None = None,
        provider_name: str | None = None,
        provider_picture: str | None = None,
    ) -> None:
        self.status = LinkStatus.ACTIVE
        self._cache_hints(provider_email, provider_name, provider_picture)
        self.updated_at = utc_now()

    def update_tokens(
        self,
        access_token: str | None,
        refresh_token: str | None,
        expires_at: datetime | None,
    ) -> None:
        for name, token in (("access_token", access_token), ("refresh_token", refresh_token)):
            if token is not None and len(token) > MAX_TOKEN_LENGTH:
                msg = f"{name} cannot exceed {MAX_TOKEN_LENGTH} characters"
                raise ValidationFailedError(msg)
        self.access_token = access_token
        self.refresh_token = refresh_token
        self.token_expires_at = expires_at
        self.updated_at = utc_now()

    def has_valid_token(self, now: datetime | None = None) -> bool:
        """Active link with a token that has not expired (no expiry = valid)."""
        if not self.is_active or not self.access_token:
            return False
        if self.token_expires_at is None:
            return True
        return self.token_expires_at > (now or utc_now())

    def _cache_hints(
        self,
        provider_email: str | None,
        provider_name: str | None,
        provider_picture: str | None,
    ) -> None:
        if provider_email:
            self.provider_email = _clip(provider_email.strip().lower(), MAX_PROVIDER_EMAIL_LENGTH)
        if provider_name:
            self.provider_name = _clip(provider_name, MAX_PROVIDER_NAME_LENGTH)
        if provider_picture:
            self.provider_picture = _clip(provider_picture, MAX_PROVIDER_PICTURE_LENGTH)
