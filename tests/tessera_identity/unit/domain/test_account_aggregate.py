"""Unit tests for the Account aggregate."""

import pytest

from tessera_identity.domain.account import (
    Account,
    AccountStatus,
    Email,
    InvalidEmailError,
)
from tessera_identity.domain.shared.exceptions import (
    InvalidTransitionError,
    ValidationFailedError,
)


class TestAccountCreation:
    def test_create_defaults(self):
        account = Account.create("Alice@Example.com ")

        assert account.primary_email == "alice@example.com"
        assert account.status == AccountStatus.ACTIVE
        assert account.email_verified is False
        assert account.is_active
        assert account.created_at.tzinfo is not None

    def test_ids_are_unique_and_not_sequential(self):
        ids = {Account.create("a@example.com").id for _ in range(50)}

        assert len(ids) == 50
        assert all(len(i) == 32 for i in ids)

    def test_create_verified(self):
        account = Account.create("a@example.com", email_verified=True)

        assert account.email_verified is True

    def test_invalid_email_rejected(self):
        with pytest.raises(InvalidEmailError):
            Account.create("not-an-email")

    def test_equality_by_id(self):
        a = Account.create("a@example.com", id="same")
        b = Account.create("b@example.com", id="same")

        assert a == b
        assert hash(a) == hash(b)


class TestAccountStatus:
    @pytest.mark.parametrize(
        "target",
        [AccountStatus.INACTIVE, AccountStatus.SUSPENDED, AccountStatus.DELETED],
    )
    def test_active_can_move_anywhere(self, alice, target):
        assert alice.change_status(target) is True
        assert alice.status == target

    def test_suspended_back_to_active(self, alice):
        alice.change_status(AccountStatus.SUSPENDED)

        alice.change_status("active")

        assert alice.status == AccountStatus.ACTIVE

    def test_same_status_is_noop(self, alice):
        before = alice.updated_at

        assert alice.change_status(AccountStatus.ACTIVE) is False
        assert alice.updated_at == before

    @pytest.mark.parametrize(
        "target",
        [AccountStatus.ACTIVE, AccountStatus.INACTIVE, AccountStatus.SUSPENDED],
    )
    def test_deleted_is_terminal(self, alice, target):
        alice.mark_deleted()

        with pytest.raises(InvalidTransitionError):
            alice.change_status(target)

    def test_deleted_to_deleted_still_rejected(self, alice):
        alice.mark_deleted()

        with pytest.raises(InvalidTransitionError):
            alice.change_status(AccountStatus.DELETED)

    def test_mark_deleted_twice(self, alice):
        assert alice.mark_deleted() is True
        assert alice.mark_deleted() is False
        assert alice.is_deleted

    def test_unknown_status(self, alice):
        with pytest.raises(ValidationFailedError):
            alice.change_status("ARCHIVED")

    def test_transition_table(self):
        assert AccountStatus.DELETED.is_terminal
        assert not AccountStatus.SUSPENDED.is_terminal
        assert AccountStatus.INACTIVE.can_transition_to(AccountStatus.SUSPENDED)
        assert not AccountStatus.DELETED.can_transition_to(AccountStatus.ACTIVE)


class TestAccountEmail:
    def test_change_resets_verification(self):
        account = Account.create("a@example.com", email_verified=True)

        assert account.change_primary_email("b@example.com") is True

        assert account.primary_email == "b@example.com"
        assert account.email_verified is False

    def test_change_to_same_is_noop(self):
        account = Account.create("a@example.com", email_verified=True)

        assert account.change_primary_email(Email("A@example.com")) is False
        assert account.email_verified is True

    def test_change_on_deleted(self, alice):
        alice.mark_deleted()

        with pytest.raises(InvalidTransitionError):
            alice.change_primary_email("new@example.com")

    def test_set_verified(self, alice):
        alice.set_email_verified(True)

        assert alice.email_verified is True

    def test_set_verified_on_deleted(self, alice):
        alice.mark_deleted()

        with pytest.raises(InvalidTransitionError):
            alice.set_email_verified(True)
