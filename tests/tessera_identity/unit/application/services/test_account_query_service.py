"""Unit tests for AccountQueryService."""

import pytest

from tessera_identity.application.services import AccountQueryService
from tessera_identity.domain.account import (
    AccountNotFoundError,
    AccountStatus,
    OAuthProvider,
)
from tests.shared.fixtures.factories import TestIdentityFactory, make_mock_store


class TestAccountQueryService:
    def setup_method(self):
        self.store, self.uow = make_mock_store()
        self.service = AccountQueryService(self.store)

    @pytest.mark.asyncio
    async def test_get_by_id(self):
        alice = TestIdentityFactory.alice()
        self.uow.accounts.find_by_id.return_value = alice

        assert await self.service.get_by_id(alice.id) == alice

    @pytest.mark.asyncio
    async def test_get_by_id_missing(self):
        with pytest.raises(AccountNotFoundError):
            await self.service.get_by_id("missing")

    @pytest.mark.asyncio
    async def test_get_by_primary_email_normalizes(self):
        alice = TestIdentityFactory.alice()
        self.uow.accounts.find_active_by_email.return_value = alice

        await self.service.get_by_primary_email(" ALICE@example.com")

        email = self.uow.accounts.find_active_by_email.call_args[0][0]
        assert email.value == "alice@example.com"

    @pytest.mark.asyncio
    async def test_get_by_primary_email_missing(self):
        with pytest.raises(AccountNotFoundError):
            await self.service.get_by_primary_email("ghost@example.com")

    @pytest.mark.asyncio
    async def test_get_by_provider_account(self):
        alice = TestIdentityFactory.alice()
        self.uow.accounts.find_by_provider_account.return_value = alice

        assert await self.service.get_by_provider_account("github", " 42 ") == alice
        self.uow.accounts.find_by_provider_account.assert_awaited_once_with(
            OAuthProvider.GITHUB,
            "42",
        )

    @pytest.mark.asyncio
    async def test_get_by_provider_account_missing(self):
        with pytest.raises(AccountNotFoundError):
            await self.service.get_by_provider_account("GITHUB", "42")

    @pytest.mark.asyncio
    async def test_list_active(self):
        await self.service.list_active()

        self.uow.accounts.list_by_status.assert_awaited_once_with(AccountStatus.ACTIVE)

    @pytest.mark.asyncio
    async def test_lists_default_to_empty(self):
        assert await self.service.list_active_verified() == []
        assert await self.service.list_by_status("suspended") == []
        assert await self.service.search_by_email("nobody") == []

    @pytest.mark.asyncio
    async def test_blank_search_skips_storage(self):
        assert await self.service.search_by_email("   ") == []

        self.store.transaction.assert_not_called()

    @pytest.mark.asyncio
    async def test_count(self):
        self.uow.accounts.count.return_value = 3

        assert await self.service.count() == 3
