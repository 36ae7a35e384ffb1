"""Tollgate Identity - user records and their persistence.

This module handles:
- The User aggregate and its public projection
- Roles (ADMIN, USER, MODERATOR)
- The CredentialStore interface and its SQLAlchemy implementation

The application layer (tollgate.application) is the only code that
mutates users, and only through a CredentialStore.
"""

from tollgate_identity.domain.user import (
    CredentialStore,
    EmailAlreadyExistsError,
    PublicUser,
    StorageError,
    User,
    UserRole,
    to_public_user,
)

__all__ = [
    "CredentialStore",
    "EmailAlreadyExistsError",
    "PublicUser",
    "StorageError",
    "User",
    "UserRole",
    "to_public_user",
]
