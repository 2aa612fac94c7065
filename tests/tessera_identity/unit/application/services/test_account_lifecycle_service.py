"""Unit tests for AccountLifecycleService."""

import pytest

from tessera_identity.application.services import AccountLifecycleService
from tessera_identity.domain.account import (
    AccountNotFoundError,
    AccountStatus,
    EmailAlreadyExistsError,
    InvalidEmailError,
)
from tessera_identity.domain.shared.exceptions import (
    InvalidTransitionError,
    ValidationFailedError,
)
from tests.shared.fixtures.factories import (
    SequentialIdGenerator,
    TestIdentityFactory,
    make_mock_store,
)


class TestCreateAccount:
    def setup_method(self):
        self.store, self.uow = make_mock_store()
        self.service = AccountLifecycleService(
            self.store,
            id_generator=SequentialIdGenerator(),
        )

    @pytest.mark.asyncio
    async def test_creates_account_and_empty_profile(self):
        account = await self.service.create_account("A@X.com")

        assert account.id == "id-0001"
        assert account.primary_email == "a@x.com"
        assert account.status == AccountStatus.ACTIVE
        assert account.email_verified is False
        self.uow.accounts.save.assert_awaited_once_with(account)

        profile = self.uow.profiles.save.call_args[0][0]
        assert profile.account_id == account.id
        assert profile.display_name is None

    @pytest.mark.asyncio
    async def test_duplicate_email(self):
        self.uow.accounts.exists_active_by_email.return_value = True

        with pytest.raises(EmailAlreadyExistsError):
            await self.service.create_account("a@x.com")

        self.uow.accounts.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_invalid_email(self):
        with pytest.raises(InvalidEmailError):
            await self.service.create_account("nope")

        self.store.transaction.assert_not_called()


class TestStatusAndDeletion:
    def setup_method(self):
        self.store, self.uow = make_mock_store()
        self.service = AccountLifecycleService(self.store)
        self.alice = TestIdentityFactory.alice()
        self.uow.accounts.find_by_id.return_value = self.alice

    @pytest.mark.asyncio
    async def test_change_status(self):
        account = await self.service.change_status(self.alice.id, "SUSPENDED")

        assert account.status == AccountStatus.SUSPENDED
        self.uow.accounts.save.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_change_to_same_status_does_not_write(self):
        await self.service.change_status(self.alice.id, AccountStatus.ACTIVE)

        self.uow.accounts.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_change_status_out_of_deleted(self):
        self.alice.mark_deleted()

        with pytest.raises(InvalidTransitionError):
            await self.service.change_status(self.alice.id, AccountStatus.ACTIVE)

    @pytest.mark.asyncio
    async def test_change_status_unknown_value(self):
        with pytest.raises(ValidationFailedError):
            await self.service.change_status(self.alice.id, "FROZEN")

    @pytest.mark.asyncio
    async def test_change_status_missing_account(self):
        self.uow.accounts.find_by_id.return_value = None

        with pytest.raises(AccountNotFoundError):
            await self.service.change_status("missing", AccountStatus.INACTIVE)

    @pytest.mark.asyncio
    async def test_soft_delete(self):
        await self.service.soft_delete(self.alice.id)

        assert self.alice.status == AccountStatus.DELETED
        self.uow.accounts.save.assert_awaited_once_with(self.alice)
        self.uow.accounts.delete.assert_not_called()

    @pytest.mark.asyncio
    async def test_soft_delete_twice_is_noop(self):
        self.alice.mark_deleted()

        await self.service.soft_delete(self.alice.id)

        self.uow.accounts.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_soft_delete_missing(self):
        self.uow.accounts.find_by_id.return_value = None

        with pytest.raises(AccountNotFoundError):
            await self.service.soft_delete("missing")

    @pytest.mark.asyncio
    async def test_hard_delete_removes_dependants_first(self):
        calls = []
        self.uow.linked_identities.delete_by_account_id.side_effect = (
            lambda _id: calls.append("links") or 2
        )
        self.uow.profiles.delete_by_account_id.side_effect = (
            lambda _id: calls.append("profile") or 1
        )
        self.uow.accounts.delete.side_effect = lambda _id: calls.append("account") or True

        await self.service.hard_delete(self.alice.id)

        assert calls == ["links", "profile", "account"]

    @pytest.mark.asyncio
    async def test_hard_delete_missing(self):
        self.uow.accounts.find_by_id.return_value = None

        with pytest.raises(AccountNotFoundError):
            await self.service.hard_delete("missing")

        self.uow.accounts.delete.assert_not_called()


class TestEmailChanges:
    def setup_method(self):
        self.store, self.uow = make_mock_store()
        self.service = AccountLifecycleService(self.store)
        self.alice = TestIdentityFactory.alice(email_verified=True)
        self.uow.accounts.find_by_id.return_value = self.alice

    @pytest.mark.asyncio
    async def test_update_primary_email(self):
        account = await self.service.update_primary_email(self.alice.id, "new@example.com")

        assert account.primary_email == "new@example.com"
        assert account.email_verified is False
        self.uow.accounts.exists_active_by_email.assert_awaited_once()
        assert (
            self.uow.accounts.exists_active_by_email.call_args.kwargs["exclude_account_id"]
            == self.alice.id
        )

    @pytest.mark.asyncio
    async def test_update_to_same_email_is_noop(self):
        account = await self.service.update_primary_email(
            self.alice.id,
            TestIdentityFactory.ALICE_EMAIL.upper(),
        )

        assert account.email_verified is True
        self.uow.accounts.save.assert_not_called()

    @pytest.mark.asyncio
    async def test_update_to_taken_email(self):
        self.uow.accounts.exists_active_by_email.return_value = True

        with pytest.raises(EmailAlreadyExistsError):
            await self.service.update_primary_email(self.alice.id, "bob@example.com")

        assert self.alice.primary_email == TestIdentityFactory.ALICE_EMAIL

    @pytest.mark.asyncio
    async def test_update_on_deleted_account(self):
        self.alice.mark_deleted()

        with pytest.raises(InvalidTransitionError):
            await self.service.update_primary_email(self.alice.id, "new@example.com")

    @pytest.mark.asyncio
    async def test_set_email_verified(self):
        account = await self.service.set_email_verified(self.alice.id, False)

        assert account.email_verified is False
