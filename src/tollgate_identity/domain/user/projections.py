"""Outward-facing projection of a User.

Every path that returns or transmits a user goes through
``to_public_user``. PublicUser has no field for either hash, so a new
response path cannot leak them by forgetting to strip a key.
"""

from dataclasses import dataclass
from datetime import datetime

from tollgate_identity.domain.user.aggregates import User
from tollgate_identity.domain.user.value_objects import UserRole


@dataclass(frozen=True)
class PublicUser:
    """Sanitized user data safe to return to callers."""

    id: int
    email: str
    display_name: str | None
    role: UserRole
    created_at: datetime
    updated_at: datetime


def to_public_user(user: User) -> PublicUser:
    return PublicUser(
        id=user.id,
        email=user.email,
        display_name=user.display_name,
        role=user.role,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )
