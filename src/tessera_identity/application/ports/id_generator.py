"""Identifier generation port."""

from typing import Protocol


class IdGenerator(Protocol):
    """Produces globally unique, non-sequential string identifiers."""

    def new_id(self) -> str:
        """Return a fresh identifier."""
        ...
