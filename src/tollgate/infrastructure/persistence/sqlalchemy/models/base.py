"""SQLAlchemy base configuration for tollgate application models.

Identity tables live on IdentityBase; both metadata objects are created
at startup.
"""

from sqlalchemy.orm import DeclarativeBase

from tollgate_identity.infrastructure.persistence.sqlalchemy.base import TimestampMixin


class Base(DeclarativeBase):
    """Base class for application models."""


__all__ = ["Base", "TimestampMixin"]
