"""Factory wiring the application services to one store."""

from dataclasses import dataclass

from tessera_config.settings import Settings
from tessera_identity.application.ports import IdentityStore, IdGenerator
from tessera_identity.application.services import (
    AccountLifecycleService,
    AccountQueryService,
    IdentityLinkingService,
    ProfileService,
    TransactionRunner,
)


@dataclass(frozen=True)
class IdentityServices:
    """The public surface of the identity core, bound to one store."""

    lifecycle: AccountLifecycleService
    linking: IdentityLinkingService
    queries: AccountQueryService
    profiles: ProfileService


def build_identity_services(
    store: IdentityStore,
    settings: Settings | None = None,
    id_generator: IdGenerator | None = None,
) -> IdentityServices:
    """
    Create every service against the same store.

    Timeout and transient-retry defaults come from ``settings`` when given.
    Nothing is cached; callers own the returned services and the store.
    """
    timeout = settings.storage_timeout_seconds if settings else None
    retries = (
        settings.storage_transient_retries
        if settings
        else TransactionRunner.DEFAULT_TRANSIENT_RETRIES
    )

    return IdentityServices(
        lifecycle=AccountLifecycleService(store, id_generator, timeout, retries),
        linking=IdentityLinkingService(store, id_generator, timeout, retries),
        queries=AccountQueryService(store, timeout, retries),
        profiles=ProfileService(store, id_generator, timeout, retries),
    )
