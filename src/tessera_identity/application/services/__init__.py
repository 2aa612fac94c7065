"""Application services for the identity core."""

from tessera_identity.application.services.account_lifecycle_service import (
    AccountLifecycleService,
)
from tessera_identity.application.services.account_query_service import (
    AccountQueryService,
)
from tessera_identity.application.services.identity_linking_service import (
    IdentityLinkingService,
    SocialAssertion,
)
from tessera_identity.application.services.profile_service import ProfileService
from tessera_identity.application.services.transaction_runner import (
    TransactionRunner,
)
from tessera_identity.application.services.uniqueness_index import UniquenessIndex

__all__ = [
    "AccountLifecycleService",
    "AccountQueryService",
    "IdentityLinkingService",
    "ProfileService",
    "SocialAssertion",
    "TransactionRunner",
    "UniquenessIndex",
]
