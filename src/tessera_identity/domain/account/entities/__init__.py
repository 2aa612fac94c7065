"""Entities owned by the Account aggregate."""

from tessera_identity.domain.account.entities.linked_identity import LinkedIdentity
from tessera_identity.domain.account.entities.profile import (
    PROFILE_FIELD_LIMITS,
    Profile,
    ProfileUpdate,
)

__all__ = [
    "PROFILE_FIELD_LIMITS",
    "LinkedIdentity",
    "Profile",
    "ProfileUpdate",
]
