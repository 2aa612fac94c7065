"""Application factories for wiring services."""

from tessera_identity.application.factories.service_factory import (
    IdentityServices,
    build_identity_services,
)

__all__ = ["IdentityServices", "build_identity_services"]
