"""Account aggregate: the unified local identity."""

from datetime import datetime
from typing import Union

from tessera_identity.domain.account.value_objects import AccountStatus, Email
from tessera_identity.domain.shared.exceptions import InvalidTransitionError
from tessera_identity.domain.shared.identifiers import new_identifier
from tessera_identity.domain.shared.time import utc_now


class Account:
    """
    Account aggregate root.

    Owns at most one Profile and any number of LinkedIdentity records,
    which reference it by id. Email uniqueness among non-deleted accounts
    is enforced at the persistence level, not here.
    """

    def __init__(  # NOQA: PLR0913
        self,
        primary_email: Union[str, Email],
        status: Union[str, AccountStatus] = AccountStatus.ACTIVE,
        email_verified: bool = False,
        id: str | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        self._email = Email.of(primary_email)
        self._id = id or new_identifier()
        self._status = AccountStatus(status)
        self._email_verified = email_verified
        self._created_at = created_at or utc_now()
        self._updated_at = updated_at or self._created_at

    @property
    def id(self) -> str:
        return self._id

    @property
    def primary_email(self) -> str:
        return self._email.value

    @property
    def email_obj(self) -> Email:
        return self._email

    @property
    def email_verified(self) -> bool:
        return self._email_verified

    @property
    def status(self) -> AccountStatus:
        return self._status

    @property
    def is_active(self) -> bool:
        return self._status == AccountStatus.ACTIVE

    @property
    def is_deleted(self) -> bool:
        return self._status == AccountStatus.DELETED

    @property
    def created_at(self) -> datetime:
        return self._created_at

    @property
    def updated_at(self) -> datetime:
        return self._updated_at

    def change_status(self, new_status: Union[str, AccountStatus]) -> bool:
        """Move to a new status.

        Returns False when the account already has that status.

        Raises
        ------
        InvalidTransitionError
            If the transition is not allowed (anything leaving DELETED).
        """
        target = AccountStatus.parse(new_status)
        if self.is_deleted:
            self._reject_deleted(f"change status to {target.value}")
        if target == self._status:
            return False
        if not self._status.can_transition_to(target):
            msg = f"Cannot change account status from {self._status.value} to {target.value}"
            raise InvalidTransitionError(
                msg,
                details={"account_id": self._id, "from": self._status.value, "to": target.value},
            )
        self._status = target
        self._touch()
        return True

    def mark_deleted(self) -> bool:
        """Soft-delete the account. Returns False if it already was."""
        if self.is_deleted:
            return False
        return self.change_status(AccountStatus.DELETED)

    def change_primary_email(self, new_email: Union[str, Email]) -> bool:
        """Replace the primary email; a new address must be re-verified."""
        email = Email.of(new_email)
        if email == self._email:
            return False
        if self.is_deleted:
            self._reject_deleted("change primary email")
        self._email = email
        self._email_verified = False
        self._touch()
        return True

    def set_email_verified(self, verified: bool) -> None:
        if self.is_deleted:
            self._reject_deleted("change email verification")
        if self._email_verified == verified:
            return
        self._email_verified = verified
        self._touch()

    def ensure_not_deleted(self, action: str) -> None:
        if self.is_deleted:
            self._reject_deleted(action)

    def _reject_deleted(self, action: str) -> None:
        msg = f"Cannot {action}: account {self._id} is deleted"
        raise InvalidTransitionError(
            msg,
            details={"account_id": self._id, "from": AccountStatus.DELETED.value},
        )

    def _touch(self) -> None:
        self._updated_at = utc_now()

    @classmethod
    def create(
        cls,
        primary_email: Union[str, Email],
        id: str | None = None,
        email_verified: bool = False,
    ) -> "Account":
        return cls(
            primary_email=primary_email,
            id=id,
            email_verified=email_verified,
            status=AccountStatus.ACTIVE,
        )

    @classmethod
    def reconstitute(  # NOQA: PLR0913
        cls,
        id: str,
        primary_email: str,
        status: Union[str, AccountStatus],
        email_verified: bool,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Account":
        return cls(
            id=id,
            primary_email=primary_email,
            status=status,
            email_verified=email_verified,
            created_at=created_at,
            updated_at=updated_at,
        )

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Account):
            return NotImplemented
        return self._id == other._id

    def __hash__(self) -> int:
        return hash(self._id)

    def __repr__(self) -> str:
        return (
            f"Account(id={self._id}, email={self._email.value}, "
            f"status={self._status.value})"
        )
