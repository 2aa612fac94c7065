"""Ports the application layer depends on."""

from tessera_identity.application.ports.id_generator import IdGenerator
from tessera_identity.application.ports.identity_store import (
    IdentityStore,
    IdentityUnitOfWork,
)

__all__ = [
    "IdGenerator",
    "IdentityStore",
    "IdentityUnitOfWork",
]
