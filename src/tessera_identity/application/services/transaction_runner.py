"""Runs use cases inside a unit of work with timeout and transient retry."""

import asyncio
import logging
from collections.abc import Awaitable, Callable
from typing import TypeVar

from tessera_identity.application.ports import IdentityStore, IdentityUnitOfWork
from tessera_identity.domain.shared.exceptions import (
    StorageUnavailableError,
    TransientStorageError,
)

logger = logging.getLogger(__name__)

T = TypeVar("T")

UnitOfWorkCallable = Callable[[IdentityUnitOfWork], Awaitable[T]]


class TransactionRunner:
    """Executes a callable against a fresh unit of work.

    - Each attempt gets its own transaction; a failed attempt is rolled
      back entirely before the next one starts.
    - Timeouts and TransientStorageError are retried ``transient_retries``
      times, then surfaced as StorageUnavailableError.
    - Domain errors (not found, conflict, ...) pass through untouched.
    """

    DEFAULT_TRANSIENT_RETRIES = 1

    def __init__(
        self,
        store: IdentityStore,
        default_timeout: float | None = None,
        transient_retries: int = DEFAULT_TRANSIENT_RETRIES,
    ):
        self._store = store
        self._default_timeout = default_timeout
        self._transient_retries = transient_retries

    @property
    def store(self) -> IdentityStore:
        return self._store

    async def run(
        self,
        work: UnitOfWorkCallable[T],
        timeout: float | None = None,
        operation: str = "identity operation",
    ) -> T:
        effective_timeout = timeout if timeout is not None else self._default_timeout
        attempts = self._transient_retries + 1

        for attempt in range(1, attempts + 1):
            try:
                return await asyncio.wait_for(
                    self._run_once(work),
                    timeout=effective_timeout,
                )
            except (TransientStorageError, asyncio.TimeoutError) as e:
                if attempt >= attempts:
                    logger.error(
                        "%s failed after %d attempt(s): %s",
                        operation,
                        attempt,
                        str(e) or type(e).__name__,
                    )
                    raise StorageUnavailableError(
                        details={"operation": operation, "attempts": attempt},
                    ) from e
                logger.warning(
                    "Transient storage failure during %s (attempt %d/%d): %s",
                    operation,
                    attempt,
                    attempts,
                    str(e) or type(e).__name__,
                )

        # Unreachable: the loop either returns or raises
        raise StorageUnavailableError(details={"operation": operation})

    async def _run_once(self, work: UnitOfWorkCallable[T]) -> T:
        async with self._store.transaction() as uow:
            return await work(uow)
