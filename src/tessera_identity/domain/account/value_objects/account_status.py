from enum import Enum
from typing import Union

from tessera_identity.domain.shared.exceptions import ValidationFailedError


class AccountStatus(str, Enum):
    """Lifecycle status of an account.

    ACTIVE, INACTIVE and SUSPENDED move freely between each other.
    DELETED is terminal: the only way out is a permanent purge.
    """

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    DELETED = "DELETED"

    @classmethod
    def parse(cls, value: Union[str, "AccountStatus"]) -> "AccountStatus":
        if isinstance(value, AccountStatus):
            return value
        try:
            return cls(str(value).strip().upper())
        except ValueError as e:
            msg = f"Unknown account status: {value}"
            raise ValidationFailedError(msg, details={"status": str(value)}) from e

    def can_transition_to(self, target: "AccountStatus") -> bool:
        return target in _ALLOWED_TRANSITIONS[self]

    @property
    def is_terminal(self) -> bool:
        return not _ALLOWED_TRANSITIONS[self]


_ALLOWED_TRANSITIONS: dict[AccountStatus, frozenset[AccountStatus]] = {
    AccountStatus.ACTIVE: frozenset(
        {AccountStatus.INACTIVE, AccountStatus.SUSPENDED, AccountStatus.DELETED},
    ),
    AccountStatus.INACTIVE: frozenset(
        {AccountStatus.ACTIVE, AccountStatus.SUSPENDED, AccountStatus.DELETED},
    ),
    AccountStatus.SUSPENDED: frozenset(
        {AccountStatus.ACTIVE, AccountStatus.INACTIVE, AccountStatus.DELETED},
    ),
    AccountStatus.DELETED: frozenset(),
}
