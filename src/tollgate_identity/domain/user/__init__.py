"""User domain manages user identity and the current session hash.

This domain handles:
- User aggregate (id, email, role, secrets)
- PublicUser projection for everything that leaves the core
- CredentialStore interface
"""

from tollgate_identity.domain.user.aggregates import User
from tollgate_identity.domain.user.exceptions import (
    EmailAlreadyExistsError,
    StorageError,
)
from tollgate_identity.domain.user.projections import PublicUser, to_public_user
from tollgate_identity.domain.user.repositories import CredentialStore
from tollgate_identity.domain.user.value_objects import UserRole

__all__ = [
    "CredentialStore",
    "EmailAlreadyExistsError",
    "PublicUser",
    "StorageError",
    "User",
    "UserRole",
    "to_public_user",
]
