"""SQLAlchemy declarative base for tollgate_identity models.

The consuming application should include IdentityBase.metadata in its
schema creation or migration configuration.

Examples
--------
async with engine.begin() as conn:
    await conn.run_sync(IdentityBase.metadata.create_all)
"""

from datetime import datetime

from sqlalchemy import DateTime
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

from tollgate.domain.shared.time import utc_now


class IdentityBase(DeclarativeBase):
    """Declarative base for identity models."""


class TimestampMixin:
    """Mixin for created_at and updated_at timestamps (utc_now)."""

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utc_now,
        onupdate=utc_now,
        nullable=False,
    )
