"""Value objects for the account domain."""

from tessera_identity.domain.account.value_objects.account_status import (
    AccountStatus,
)
from tessera_identity.domain.account.value_objects.email import Email
from tessera_identity.domain.account.value_objects.gender import Gender
from tessera_identity.domain.account.value_objects.link_status import LinkStatus
from tessera_identity.domain.account.value_objects.oauth_provider import (
    OAuthProvider,
)

__all__ = [
    "AccountStatus",
    "Email",
    "Gender",
    "LinkStatus",
    "OAuthProvider",
]
