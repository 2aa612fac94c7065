"""Unit tests for account value objects."""

import pytest

from tessera_identity.domain.account import (
    Email,
    InvalidEmailError,
    InvalidProviderError,
    OAuthProvider,
)
from tessera_identity.domain.shared.exceptions import ErrorCode, ValidationFailedError


class TestEmail:
    def test_normalizes(self):
        assert Email("  Alice@Example.COM ").value == "alice@example.com"

    @pytest.mark.parametrize("raw", ["", "   ", "alice", "alice@", "@example.com", "a@b"])
    def test_rejects_malformed(self, raw):
        with pytest.raises(InvalidEmailError) as exc_info:
            Email(raw)

        assert exc_info.value.code == ErrorCode.INVALID_EMAIL

    def test_rejects_too_long(self):
        with pytest.raises(InvalidEmailError):
            Email("a" * 250 + "@example.com")

    def test_is_a_validation_error(self):
        with pytest.raises(ValidationFailedError):
            Email("broken")

    def test_of_passes_through(self):
        email = Email("a@example.com")

        assert Email.of(email) is email
        assert Email.of("A@example.com") == email


class TestOAuthProvider:
    @pytest.mark.parametrize("raw", ["GOOGLE", "google", " Google "])
    def test_parse_case_insensitive(self, raw):
        assert OAuthProvider.parse(raw) == OAuthProvider.GOOGLE

    def test_all_providers(self):
        assert {p.value for p in OAuthProvider} == {
            "GOOGLE",
            "FACEBOOK",
            "GITHUB",
            "KAKAO",
            "NAVER",
            "APPLE",
            "TWITTER",
            "DISCORD",
        }

    @pytest.mark.parametrize("raw", ["MYSPACE", "", None, 3])
    def test_unknown_provider(self, raw):
        with pytest.raises(InvalidProviderError) as exc_info:
            OAuthProvider.parse(raw)

        assert exc_info.value.code == ErrorCode.INVALID_PROVIDER
