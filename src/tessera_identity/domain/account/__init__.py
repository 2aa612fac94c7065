"""Account domain: the unified identity graph.

This domain handles:
- Account aggregate (id, primary email, verification flag, status)
- Profile (1:1, personal details)
- LinkedIdentity (N:1, external provider identities)
"""

from tessera_identity.domain.account.aggregates import Account
from tessera_identity.domain.account.entities import (
    LinkedIdentity,
    Profile,
    ProfileUpdate,
)
from tessera_identity.domain.account.exceptions import (
    AccountNotFoundError,
    EmailAlreadyExistsError,
    InvalidEmailError,
    InvalidProfileFieldError,
    InvalidProviderAccountIdError,
    InvalidProviderError,
    LinkedIdentityNotFoundError,
    ProfileNotFoundError,
    ProviderAlreadyLinkedError,
    ProviderLinkAlreadyExistsError,
)
from tessera_identity.domain.account.repositories import (
    AccountRepository,
    LinkedIdentityRepository,
    ProfileRepository,
)
from tessera_identity.domain.account.value_objects import (
    AccountStatus,
    Email,
    Gender,
    LinkStatus,
    OAuthProvider,
)

__all__ = [
    "Account",
    "AccountNotFoundError",
    "AccountRepository",
    "AccountStatus",
    "Email",
    "EmailAlreadyExistsError",
    "Gender",
    "InvalidEmailError",
    "InvalidProfileFieldError",
    "InvalidProviderAccountIdError",
    "InvalidProviderError",
    "LinkStatus",
    "LinkedIdentity",
    "LinkedIdentityNotFoundError",
    "LinkedIdentityRepository",
    "OAuthProvider",
    "Profile",
    "ProfileNotFoundError",
    "ProfileRepository",
    "ProfileUpdate",
    "ProviderAlreadyLinkedError",
    "ProviderLinkAlreadyExistsError",
]
