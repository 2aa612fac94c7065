"""Unit tests for the LinkedIdentity entity."""

from datetime import timedelta

import pytest

from tessera_identity.domain.account import (
    InvalidProviderAccountIdError,
    LinkedIdentity,
    LinkStatus,
    OAuthProvider,
)
from tessera_identity.domain.shared.exceptions import ValidationFailedError
from tessera_identity.domain.shared.time import utc_now


def _link(**kwargs) -> LinkedIdentity:
    values = {
        "account_id": "acc",
        "provider": "google",
        "provider_account_id": " g1 ",
        "provider_email": "Alice@Example.com",
        "provider_name": "Alice",
    }
    values.update(kwargs)
    return LinkedIdentity.link(**values)


class TestLink:
    def test_link_normalizes(self):
        linked = _link()

        assert linked.provider == OAuthProvider.GOOGLE
        assert linked.provider_account_id == "g1"
        assert linked.provider_email == "alice@example.com"
        assert linked.status == LinkStatus.ACTIVE

    @pytest.mark.parametrize("external_id", ["", "   ", None, "x" * 256])
    def test_bad_provider_account_id(self, external_id):
        with pytest.raises(InvalidProviderAccountIdError):
            _link(provider_account_id=external_id)

    def test_hints_are_clipped(self):
        linked = _link(provider_name="n" * 150)

        assert len(linked.provider_name) == 100


class TestRevocation:
    def test_revoke(self):
        linked = _link()

        assert linked.revoke() is True
        assert linked.is_revoked
        assert linked.revoke() is False

    def test_reactivate_refreshes_hints(self):
        linked = _link()
        linked.revoke()

        linked.reactivate("new@example.com", "Alice B", None)

        assert linked.is_active
        assert linked.provider_email == "new@example.com"
        assert linked.provider_name == "Alice B"


class TestTokens:
    def test_has_valid_token(self):
        linked = _link()
        now = utc_now()

        assert linked.has_valid_token(now) is False

        linked.update_tokens("access", "refresh", now + timedelta(hours=1))
        assert linked.has_valid_token(now) is True
        assert linked.has_valid_token(now + timedelta(hours=2)) is False

    def test_token_without_expiry_is_valid(self):
        linked = _link()
        linked.update_tokens("access", None, None)

        assert linked.has_valid_token() is True

    def test_revoked_link_has_no_valid_token(self):
        linked = _link()
        linked.update_tokens("access", None, None)
        linked.revoke()

        assert linked.has_valid_token() is False

    def test_token_too_long(self):
        with pytest.raises(ValidationFailedError):
            _link().update_tokens("a" * 1001, None, None)
