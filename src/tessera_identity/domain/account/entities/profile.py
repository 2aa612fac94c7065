"""Profile entity, owned 1:1 by an Account."""

from dataclasses import dataclass, field, fields
from datetime import date, datetime
from typing import Optional

from tessera_identity.domain.account.exceptions import InvalidProfileFieldError
from tessera_identity.domain.account.value_objects import Gender
from tessera_identity.domain.shared.exceptions import ValidationFailedError
from tessera_identity.domain.shared.identifiers import new_identifier
from tessera_identity.domain.shared.time import utc_now

# Column limits shared with the persistence model
PROFILE_FIELD_LIMITS: dict[str, int] = {
    "display_name": 50,
    "full_name": 100,
    "phone_number": 20,
    "address": 500,
    "profile_image_url": 500,
    "bio": 1000,
    "website_url": 500,
    "location": 100,
}


@dataclass(frozen=True)
class ProfileUpdate:
    """Partial profile change.

    Fields left as None are not touched. Names listed in ``clear`` are
    reset to None. Empty strings are stored as None.
    """

    display_name: Optional[str] = None
    full_name: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[Gender] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    profile_image_url: Optional[str] = None
    bio: Optional[str] = None
    website_url: Optional[str] = None
    location: Optional[str] = None
    clear: frozenset[str] = frozenset()

    def changes(self) -> dict[str, object]:
        values: dict[str, object] = {}
        for f in fields(self):
            if f.name == "clear":
                continue
            value = getattr(self, f.name)
            if value is not None:
                values[f.name] = value
        for name in self.clear:
            if name not in _EDITABLE_FIELDS:
                msg = f"Unknown profile field: {name}"
                raise ValidationFailedError(msg)
            values[name] = None
        return values


@dataclass
class Profile:
    """Personal details for an account.

    A profile may be soft-deleted (``deleted_at`` set) and restored; it is
    physically removed only together with its account.
    """

    account_id: str
    id: str = field(default_factory=new_identifier)
    display_name: Optional[str] = None
    full_name: Optional[str] = None
    birth_date: Optional[date] = None
    gender: Optional[Gender] = None
    phone_number: Optional[str] = None
    address: Optional[str] = None
    profile_image_url: Optional[str] = None
    bio: Optional[str] = None
    website_url: Optional[str] = None
    location: Optional[str] = None
    deleted_at: Optional[datetime] = None
    created_at: datetime = field(default_factory=utc_now)
    updated_at: datetime = field(default_factory=utc_now)

    @classmethod
    def empty(cls, account_id: str, id: str | None = None) -> "Profile":
        return cls(account_id=account_id, id=id or new_identifier())

    @classmethod
    def from_provider_hints(
        cls,
        account_id: str,
        provider_name: str | None,
        provider_picture: str | None,
        id: str | None = None,
    ) -> "Profile":
        """Build a profile pre-populated from what a provider told us."""
        profile = cls.empty(account_id, id=id)
        profile.apply_hints(provider_name, provider_picture)
        return profile

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None

    def apply_hints(
        self,
        provider_name: str | None,
        provider_picture: str | None,
    ) -> None:
        # Provider values are cached hints; truncate rather than reject.
        if provider_name:
            self.display_name = provider_name[: PROFILE_FIELD_LIMITS["display_name"]]
            self.full_name = provider_name[: PROFILE_FIELD_LIMITS["full_name"]]
        if provider_picture:
            self.profile_image_url = provider_picture[
                : PROFILE_FIELD_LIMITS["profile_image_url"]
            ]
        self.updated_at = utc_now()

    def apply(self, update: ProfileUpdate) -> bool:
        """Apply an explicit edit. Returns True if anything changed."""
        changed = False
        for name, value in update.changes().items():
            if isinstance(value, str):
                value = value.strip() or None  # NOQA: PLW2901
            if isinstance(value, str) and name in PROFILE_FIELD_LIMITS:
                limit = PROFILE_FIELD_LIMITS[name]
                if len(value) > limit:
                    raise InvalidProfileFieldError(name, limit)
            if name == "gender" and value is not None:
                value = Gender(value)  # NOQA: PLW2901
            if getattr(self, name) != value:
                setattr(self, name, value)
                changed = True
        if changed:
            self.updated_at = utc_now()
        return changed

    def soft_delete(self) -> bool:
        if self.deleted_at is not None:
            return False
        self.deleted_at = utc_now()
        self.updated_at = self.deleted_at
        return True

    def restore(self) -> bool:
        if self.deleted_at is None:
            return False
        self.deleted_at = None
        self.updated_at = utc_now()
        return True


_EDITABLE_FIELDS = frozenset(
    f.name for f in fields(ProfileUpdate) if f.name != "clear"
)
