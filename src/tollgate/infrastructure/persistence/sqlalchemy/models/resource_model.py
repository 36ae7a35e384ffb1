"""SQLAlchemy model for owner-scoped resources."""

from sqlalchemy import JSON, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column

from tollgate.infrastructure.persistence.sqlalchemy.models.base import (
    Base,
    TimestampMixin,
)


class ResourceModel(Base, TimestampMixin):
    """Database model for resources.

    Table: resources
    """

    __tablename__ = "resources"

    __table_args__ = (
        # Owner-scoped listings, newest first
        Index("ix_resources_user_created", "user_id", "created_at"),
        Index("ix_resources_status", "status"),
        Index("ix_resources_category", "category"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)

    # Owning user (users.id in the identity schema)
    user_id: Mapped[int] = mapped_column(Integer, nullable=False)

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str | None] = mapped_column(String(1000), nullable=True)
    content: Mapped[str | None] = mapped_column(Text, nullable=True)
    status: Mapped[str] = mapped_column(String(20), default="DRAFT", nullable=False)
    category: Mapped[str | None] = mapped_column(String(100), nullable=True)
    tags: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<ResourceModel(id={self.id}, user_id={self.user_id}, "
            f"title={self.title})>"
        )
