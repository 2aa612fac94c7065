"""Shared domain exceptions and error codes.

Every error the identity core surfaces derives from IdentityError so the
calling layer (HTTP handlers, CLI) can translate it into a user-facing
response without knowing about the storage engine underneath.
"""

from enum import Enum
from typing import Any


class ErrorCode(str, Enum):
    """Stable error codes for API clients.

    These codes are part of the public contract. Should not be changed.
    """

    # Validation Errors (400)
    VALIDATION_FAILED = "VALIDATION_FAILED"
    INVALID_EMAIL = "INVALID_EMAIL"
    INVALID_PROVIDER = "INVALID_PROVIDER"
    INVALID_PROVIDER_ACCOUNT_ID = "INVALID_PROVIDER_ACCOUNT_ID"
    INVALID_PROFILE_FIELD = "INVALID_PROFILE_FIELD"

    # Not Found Errors (404)
    NOT_FOUND = "NOT_FOUND"
    ACCOUNT_NOT_FOUND = "ACCOUNT_NOT_FOUND"
    PROFILE_NOT_FOUND = "PROFILE_NOT_FOUND"
    LINKED_IDENTITY_NOT_FOUND = "LINKED_IDENTITY_NOT_FOUND"

    # Conflict Errors (409)
    CONFLICT = "CONFLICT"
    EMAIL_ALREADY_EXISTS = "EMAIL_ALREADY_EXISTS"
    PROVIDER_LINK_ALREADY_EXISTS = "PROVIDER_LINK_ALREADY_EXISTS"
    PROVIDER_ALREADY_LINKED = "PROVIDER_ALREADY_LINKED"

    # Business Rule Violations (422)
    INVALID_TRANSITION = "INVALID_TRANSITION"

    # Storage Errors (503)
    STORAGE_UNAVAILABLE = "STORAGE_UNAVAILABLE"


class IdentityError(Exception):
    """Base exception for all identity-related errors.

    Attributes
    ----------
    message
        Human-readable error message (safe for end users)
    code
        Stable error code for programmatic handling
    details
        Optional additional context (logged but not exposed to users)
    """

    default_code = ErrorCode.VALIDATION_FAILED
    default_message = "Identity operation failed"

    def __init__(
        self,
        message: str | None = None,
        code: ErrorCode | None = None,
        details: dict[str, Any] | None = None,
    ):
        self.message = message or self.default_message
        self.code = code or self.default_code
        self.details = details or {}
        super().__init__(self.message)

    def __str__(self) -> str:
        return self.message

    def __repr__(self) -> str:
        return (
            f"{type(self).__name__}("
            f"message={self.message!r}, "
            f"code={self.code.value!r}, "
            f"details={self.details!r})"
        )


class ValidationFailedError(IdentityError):
    """Malformed input."""

    default_message = "Validation failed"


class NotFoundError(IdentityError):
    """A requested entity does not exist."""

    default_code = ErrorCode.NOT_FOUND
    default_message = "Not found"


class ConflictError(IdentityError):
    """The write would break a uniqueness rule."""

    default_code = ErrorCode.CONFLICT
    default_message = "Conflicting identity data"

    @property
    def rejected_by_storage(self) -> bool:
        """True when a storage constraint rejected the write.

        Storage adapters raise these from the driver error they translate.
        """
        return self.__cause__ is not None


class InvalidTransitionError(IdentityError):
    """The status change is not permitted."""

    default_code = ErrorCode.INVALID_TRANSITION
    default_message = "Invalid status transition"


class StorageUnavailableError(IdentityError):
    """The store kept failing after the internal retry."""

    default_code = ErrorCode.STORAGE_UNAVAILABLE
    default_message = "Identity storage is temporarily unavailable"


class TransientStorageError(Exception):
    """Raised by storage adapters for failures worth one more attempt.

    Never leaves the application layer: the transaction runner either
    retries or converts it into StorageUnavailableError.
    """
