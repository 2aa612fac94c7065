"""Tessera Identity - unified accounts across local and social sign-in.

This module handles:
- Accounts (primary email, verification flag, lifecycle status)
- Profiles (1:1 personal details)
- Linked identities (external provider accounts tied to an account)
- Social sign-in resolution (find, link or create in one unit of work)

Storage is reached through the IdentityStore port; the SQLAlchemy
adapter lives in tessera_identity.infrastructure.persistence.sqlalchemy.
"""

from tessera_identity.application.factories import (
    IdentityServices,
    build_identity_services,
)
from tessera_identity.application.ports import (
    IdentityStore,
    IdentityUnitOfWork,
    IdGenerator,
)
from tessera_identity.application.services import (
    AccountLifecycleService,
    AccountQueryService,
    IdentityLinkingService,
    ProfileService,
)
from tessera_identity.domain.account import (
    Account,
    AccountNotFoundError,
    AccountStatus,
    Email,
    EmailAlreadyExistsError,
    Gender,
    InvalidEmailError,
    InvalidProfileFieldError,
    InvalidProviderAccountIdError,
    InvalidProviderError,
    LinkedIdentity,
    LinkedIdentityNotFoundError,
    LinkStatus,
    OAuthProvider,
    Profile,
    ProfileNotFoundError,
    ProfileUpdate,
    ProviderAlreadyLinkedError,
    ProviderLinkAlreadyExistsError,
)
from tessera_identity.domain.shared.exceptions import (
    ConflictError,
    ErrorCode,
    IdentityError,
    InvalidTransitionError,
    NotFoundError,
    StorageUnavailableError,
    ValidationFailedError,
)

__all__ = [
    "Account",
    "AccountLifecycleService",
    "AccountNotFoundError",
    "AccountQueryService",
    "AccountStatus",
    "ConflictError",
    "Email",
    "EmailAlreadyExistsError",
    "ErrorCode",
    "Gender",
    "IdGenerator",
    "IdentityError",
    "IdentityLinkingService",
    "IdentityServices",
    "IdentityStore",
    "IdentityUnitOfWork",
    "InvalidEmailError",
    "InvalidProfileFieldError",
    "InvalidProviderAccountIdError",
    "InvalidProviderError",
    "InvalidTransitionError",
    "LinkStatus",
    "LinkedIdentity",
    "LinkedIdentityNotFoundError",
    "NotFoundError",
    "OAuthProvider",
    "Profile",
    "ProfileNotFoundError",
    "ProfileService",
    "ProfileUpdate",
    "ProviderAlreadyLinkedError",
    "ProviderLinkAlreadyExistsError",
    "StorageUnavailableError",
    "ValidationFailedError",
    "build_identity_services",
]
