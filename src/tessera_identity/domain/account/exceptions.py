"""Account domain exceptions.

Concrete errors for the account graph, grouped under the shared taxonomy
(not found, conflict, invalid transition, validation failed).
"""

from tessera_identity.domain.shared.exceptions import (
    ConflictError,
    ErrorCode,
    NotFoundError,
    ValidationFailedError,
)


class InvalidEmailError(ValidationFailedError):
    """Raised when email format is invalid."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.INVALID_EMAIL)


class InvalidProviderError(ValidationFailedError):
    """Raised when a provider name is not one of the supported providers."""

    def __init__(self, provider: object) -> None:
        self.provider = provider
        super().__init__(
            f"Unsupported identity provider: {provider}",
            ErrorCode.INVALID_PROVIDER,
            {"provider": str(provider)},
        )


class InvalidProviderAccountIdError(ValidationFailedError):
    """Raised when a provider-assigned account id is blank or too long."""

    def __init__(self, message: str) -> None:
        super().__init__(message, ErrorCode.INVALID_PROVIDER_ACCOUNT_ID)


class InvalidProfileFieldError(ValidationFailedError):
    """Raised when a profile field exceeds its allowed length."""

    def __init__(self, field: str, max_length: int) -> None:
        self.field = field
        super().__init__(
            f"Profile field '{field}' cannot exceed {max_length} characters",
            ErrorCode.INVALID_PROFILE_FIELD,
            {"field": field, "max_length": max_length},
        )


class AccountNotFoundError(NotFoundError):
    """Account not found."""

    def __init__(self, key: str) -> None:
        self.key = key
        super().__init__(
            f"Account not found: {key}",
            ErrorCode.ACCOUNT_NOT_FOUND,
            {"key": key},
        )


class ProfileNotFoundError(NotFoundError):
    """Profile not found for an account."""

    def __init__(self, account_id: str) -> None:
        self.account_id = account_id
        super().__init__(
            f"Profile not found for account: {account_id}",
            ErrorCode.PROFILE_NOT_FOUND,
            {"account_id": account_id},
        )


class LinkedIdentityNotFoundError(NotFoundError):
    """No linked identity for the given provider."""

    def __init__(self, account_id: str, provider: str) -> None:
        self.account_id = account_id
        self.provider = provider
        super().__init__(
            f"No linked {provider} identity for account: {account_id}",
            ErrorCode.LINKED_IDENTITY_NOT_FOUND,
            {"account_id": account_id, "provider": provider},
        )


class EmailAlreadyExistsError(ConflictError):
    """Email already used by a non-deleted account."""

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(
            f"Email already registered: {email}",
            ErrorCode.EMAIL_ALREADY_EXISTS,
            {"email": email},
        )


class ProviderLinkAlreadyExistsError(ConflictError):
    """The (provider, provider account id) pair is already linked."""

    def __init__(self, provider: str, provider_account_id: str) -> None:
        self.provider = provider
        self.provider_account_id = provider_account_id
        super().__init__(
            f"{provider} account {provider_account_id} is already linked",
            ErrorCode.PROVIDER_LINK_ALREADY_EXISTS,
            {"provider": provider, "provider_account_id": provider_account_id},
        )


class ProviderAlreadyLinkedError(ConflictError):
    """The account already holds a live link for this provider."""

    def __init__(self, account_id: str, provider: str) -> None:
        self.account_id = account_id
        self.provider = provider
        super().__init__(
            f"Account {account_id} already has a linked {provider} identity",
            ErrorCode.PROVIDER_ALREADY_LINKED,
            {"account_id": account_id, "provider": provider},
        )
