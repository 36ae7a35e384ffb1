"""SQLAlchemy implementation for tollgate_identity persistence.

Provides:
- IdentityBase: Declarative base for identity models
- UserModel: SQLAlchemy model for users
- CredentialStoreSQLAlchemy: CredentialStore implementation

Note: The consuming application should include IdentityBase.metadata
when creating its schema.
"""

from tollgate_identity.infrastructure.persistence.sqlalchemy.base import IdentityBase
from tollgate_identity.infrastructure.persistence.sqlalchemy.models import UserModel
from tollgate_identity.infrastructure.persistence.sqlalchemy.repositories import (
    CredentialStoreSQLAlchemy,
)

__all__ = [
    "CredentialStoreSQLAlchemy",
    "IdentityBase",
    "UserModel",
]
