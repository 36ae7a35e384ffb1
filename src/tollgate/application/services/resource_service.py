"""Owner-scoped CRUD over resources."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tollgate.application.services.storage_errors import storage_failures
from tollgate.domain.resources import (
    Resource,
    ResourceChanges,
    ResourceDraft,
    ResourcePage,
    ResourceRepository,
    ResourceStatus,
)
from tollgate.domain.shared.exceptions import NotFoundError

if TYPE_CHECKING:
    from tollgate.application.context import ActorContext
    from tollgate.application.services.auth_facade import AuthFacade

logger = logging.getLogger(__name__)

RESOURCE_NOT_FOUND_MESSAGE = "Resource not found"


class ResourceService:
    """
    Application service for resources.

    ADMIN sees and edits every resource. Any other role sees only its own:
    listings are filtered to the caller before pagination, and single
    reads, updates, and deletes of someone else's resource raise
    AuthorizationError. A missing resource is a NotFoundError for every
    caller.
    """

    def __init__(self, repository: ResourceRepository, facade: AuthFacade):
        self._repository = repository
        self._facade = facade

    async def list_resources(  # NOQA: PLR0913
        self,
        actor: ActorContext,
        page: int = 1,
        page_size: int = 20,
        status: ResourceStatus | None = None,
        category: str | None = None,
    ) -> ResourcePage:
        owner_id = self._facade.guard.owner_scope(actor.role, actor.user_id)
        with storage_failures("list_resources"):
            items, total = await self._repository.find_page(
                owner_id=owner_id,
                offset=(page - 1) * page_size,
                limit=page_size,
                status=status,
                category=category,
            )
        return ResourcePage(items=items, total=total, page=page, page_size=page_size)

    async def get_resource(self, actor: ActorContext, resource_id: int) -> Resource:
        """
        Return a resource the actor may access.

        Raises
        ------
        NotFoundError
            If the resource does not exist
        AuthorizationError
            If the actor is neither the owner nor an admin
        """
        with storage_failures("get_resource"):
            resource = await self._repository.find_by_id(resource_id)
        if resource is None:
            raise NotFoundError(RESOURCE_NOT_FOUND_MESSAGE)
        self._facade.authorize(actor, resource.owner_id)
        return resource

    async def create_resource(
        self,
        actor: ActorContext,
        draft: ResourceDraft,
    ) -> Resource:
        with storage_failures("create_resource"):
            resource = await self._repository.create(actor.user_id, draft)
        logger.info("Resource %s created by user %s", resource.id, actor.user_id)
        return resource

    async def update_resource(
        self,
        actor: ActorContext,
        resource_id: int,
        changes: ResourceChanges,
    ) -> Resource:
        existing = await self.get_resource(actor, resource_id)
        if changes.is_empty:
            return existing

        with storage_failures("update_resource"):
            updated = await self._repository.update(resource_id, changes)
        if updated is None:
            raise NotFoundError(RESOURCE_NOT_FOUND_MESSAGE)
        logger.info("Resource %s updated by user %s", resource_id, actor.user_id)
        return updated

    async def delete_resource(self, actor: ActorContext, resource_id: int) -> None:
        await self.get_resource(actor, resource_id)

        with storage_failures("delete_resource"):
            deleted = await self._repository.delete(resource_id)
        if not deleted:
            raise NotFoundError(RESOURCE_NOT_FOUND_MESSAGE)
        logger.info("Resource %s deleted by user %s", resource_id, actor.user_id)
