"""SQLAlchemy models for the identity graph.

Importing this package registers every table with Base.metadata.
"""

from tessera_identity.infrastructure.persistence.sqlalchemy.models.account_model import (
    AccountModel,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.models.linked_identity_model import (  # NOQA: E501
    LinkedIdentityModel,
)
from tessera_identity.infrastructure.persistence.sqlalchemy.models.profile_model import (
    ProfileModel,
)

__all__ = [
    "AccountModel",
    "LinkedIdentityModel",
    "ProfileModel",
]
