from enum import Enum


class LinkStatus(str, Enum):
    """Status of a linked external identity."""

    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    REVOKED = "REVOKED"
