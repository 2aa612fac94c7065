"""Identifier helpers for domain entities."""

from uuid import uuid4


def new_identifier() -> str:
    """Return a random, non-sequential identifier (UUID4, 32 hex chars)."""
    return uuid4().hex


class UuidIdGenerator:
    """Default identifier generator backed by UUID4."""

    def new_id(self) -> str:
        return new_identifier()
