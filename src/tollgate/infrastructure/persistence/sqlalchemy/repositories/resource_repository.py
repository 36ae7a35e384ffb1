"""SQLAlchemy implementation of ResourceRepository.

Listings are filtered by owner through apply_owner_scope before any
ordering, offset, or limit is applied, and the total is counted over the
same filtered statement.
"""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager
from typing import Any

from sqlalchemy import Select, delete, func, select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from tollgate.domain.resources import (
    Resource,
    ResourceChanges,
    ResourceDraft,
    ResourceRepository,
    ResourceStatus,
)
from tollgate.domain.shared.time import ensure_tz_aware, utc_now
from tollgate.infrastructure.persistence.sqlalchemy.models import ResourceModel
from tollgate.infrastructure.persistence.sqlalchemy.scoping import apply_owner_scope
from tollgate_identity.domain.user import StorageError

logger = logging.getLogger(__name__)


class ResourceRepositorySQLAlchemy(ResourceRepository):
    """SQLAlchemy implementation of the resource repository."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]) -> None:
        self._session_maker = session_maker

    async def find_by_id(self, resource_id: int) -> Resource | None:
        async with self._transaction("find_resource") as session:
            model = await session.get(ResourceModel, resource_id)
            return self._map_to_domain(model) if model else None

    async def find_page(  # NOQA: PLR0913
        self,
        owner_id: int | None,
        offset: int,
        limit: int,
        status: ResourceStatus | None = None,
        category: str | None = None,
    ) -> tuple[list[Resource], int]:
        stmt = self._apply_filters(select(ResourceModel), status, category)
        stmt = apply_owner_scope(stmt, ResourceModel.user_id, owner_id)

        count_stmt = select(func.count()).select_from(stmt.subquery())
        page_stmt = (
            stmt.order_by(ResourceModel.created_at.desc(), ResourceModel.id.desc())
            .offset(offset)
            .limit(limit)
        )

        async with self._transaction("list_resources") as session:
            total = (await session.execute(count_stmt)).scalar_one()
            result = await session.execute(page_stmt)
            items = [self._map_to_domain(m) for m in result.scalars().all()]
        return items, total

    async def create(self, owner_id: int, draft: ResourceDraft) -> Resource:
        async with self._transaction("create_resource") as session:
            model = ResourceModel(
                user_id=owner_id,
                title=draft.title,
                status=draft.status.value,
                description=draft.description,
                content=draft.content,
                category=draft.category,
                tags=list(draft.tags),
            )
            session.add(model)
            await session.flush()
            logger.debug("Created resource %s for user %s", model.id, owner_id)
            return self._map_to_domain(model)

    async def update(
        self,
        resource_id: int,
        changes: ResourceChanges,
    ) -> Resource | None:
        async with self._transaction("update_resource") as session:
            model = await session.get(ResourceModel, resource_id)
            if model is None:
                return None
            for name, value in self._column_values(changes.values).items():
                setattr(model, name, value)
            model.updated_at = utc_now()
            await session.flush()
            return self._map_to_domain(model)

    async def delete(self, resource_id: int) -> bool:
        async with self._transaction("delete_resource") as session:
            stmt = delete(ResourceModel).where(ResourceModel.id == resource_id)
            result = await session.execute(stmt)
            return result.rowcount == 1

    @asynccontextmanager
    async def _transaction(self, operation: str) -> AsyncIterator[AsyncSession]:
        try:
            async with self._session_maker() as session, session.begin():
                yield session
        except SQLAlchemyError as e:
            logger.error("Resource repository %s failed: %s", operation, e)
            raise StorageError(operation) from e

    @staticmethod
    def _apply_filters(
        stmt: Select[Any],
        status: ResourceStatus | None,
        category: str | None,
    ) -> Select[Any]:
        if status is not None:
            stmt = stmt.where(ResourceModel.status == status.value)
        if category is not None:
            stmt = stmt.where(ResourceModel.category == category)
        return stmt

    @staticmethod
    def _column_values(values: dict[str, Any]) -> dict[str, Any]:
        columns = dict(values)
        if isinstance(columns.get("status"), ResourceStatus):
            columns["status"] = columns["status"].value
        if "tags" in columns:
            columns["tags"] = list(columns["tags"] or [])
        return columns

    def _map_to_domain(self, model: ResourceModel) -> Resource:
        return Resource(
            id=model.id,
            owner_id=model.user_id,
            title=model.title,
            status=ResourceStatus(model.status),
            description=model.description,
            content=model.content,
            category=model.category,
            tags=list(model.tags or []),
            created_at=ensure_tz_aware(model.created_at),
            updated_at=ensure_tz_aware(model.updated_at),
        )
