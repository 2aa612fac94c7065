from tessera_identity.domain.account.repositories.account_repository import (
    AccountRepository,
)
from tessera_identity.domain.account.repositories.linked_identity_repository import (
    LinkedIdentityRepository,
)
from tessera_identity.domain.account.repositories.profile_repository import (
    ProfileRepository,
)

__all__ = [
    "AccountRepository",
    "LinkedIdentityRepository",
    "ProfileRepository",
]
