"""Shared utilities for SQLAlchemy repositories."""

from sqlalchemy.exc import IntegrityError

LIKE_ESCAPE = "\\"


def contains_pattern(keyword: str) -> str:
    """Build a LIKE pattern matching ``keyword`` anywhere, wildcards escaped."""
    escaped = (
        keyword.replace(LIKE_ESCAPE, LIKE_ESCAPE * 2)
        .replace("%", f"{LIKE_ESCAPE}%")
        .replace("_", f"{LIKE_ESCAPE}_")
    )
    return f"%{escaped}%"


def is_unique_violation(error: IntegrityError, *needles: str) -> bool:
    """Check whether an IntegrityError is a unique violation mentioning all needles.

    Works on both the SQLite ("UNIQUE constraint failed: t.col") and the
    PostgreSQL ("duplicate key value violates unique constraint") wording.
    """
    message = str(error.orig if error.orig is not None else error).lower()
    if "unique" not in message:
        return False
    return all(needle in message for needle in needles)
