from enum import Enum


class UserRole(str, Enum):
    """User roles. Only ADMIN bypasses ownership checks."""

    ADMIN = "ADMIN"
    USER = "USER"
    MODERATOR = "MODERATOR"
