"""Supported external identity providers."""

from enum import Enum
from typing import Union

from tessera_identity.domain.account.exceptions import InvalidProviderError


class OAuthProvider(str, Enum):
    """External identity providers an account can be linked to."""

    GOOGLE = "GOOGLE"
    FACEBOOK = "FACEBOOK"
    GITHUB = "GITHUB"
    KAKAO = "KAKAO"
    NAVER = "NAVER"
    APPLE = "APPLE"
    TWITTER = "TWITTER"
    DISCORD = "DISCORD"

    @classmethod
    def parse(cls, value: Union[str, "OAuthProvider"]) -> "OAuthProvider":
        """Parse a provider from its enum member or a case-insensitive name."""
        if isinstance(value, OAuthProvider):
            return value
        if not isinstance(value, str):
            raise InvalidProviderError(value)
        try:
            return cls(value.strip().upper())
        except ValueError as e:
            raise InvalidProviderError(value) from e
