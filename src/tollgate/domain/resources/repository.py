"""Abstract resource repository.

Ownership is not enforced here. Callers pass the owner filter for
listings and check access on single records themselves.
"""

from abc import ABC, abstractmethod

from tollgate.domain.resources.resource import (
    Resource,
    ResourceChanges,
    ResourceDraft,
    ResourceStatus,
)


class ResourceRepository(ABC):
    """Persistence for resources. Every method may raise StorageError."""

    @abstractmethod
    async def find_by_id(self, resource_id: int) -> Resource | None:
        """Find a resource by id regardless of owner."""

    @abstractmethod
    async def find_page(  # NOQA: PLR0913
        self,
        owner_id: int | None,
        offset: int,
        limit: int,
        status: ResourceStatus | None = None,
        category: str | None = None,
    ) -> tuple[list[Resource], int]:
        """
        Return one page of resources, newest first, and the total count.

        Parameters
        ----------
        owner_id
            Only rows owned by this user, or every row when None
        offset
            Rows to skip, counted after filtering
        limit
            Maximum rows to return
        status
            Optional status filter
        category
            Optional exact category filter

        Returns
        -------
        The page items and the number of rows matching the same filters
        """

    @abstractmethod
    async def create(self, owner_id: int, draft: ResourceDraft) -> Resource:
        """Insert a resource owned by ``owner_id``."""

    @abstractmethod
    async def update(
        self,
        resource_id: int,
        changes: ResourceChanges,
    ) -> Resource | None:
        """Apply a partial update; returns None if the resource is gone."""

    @abstractmethod
    async def delete(self, resource_id: int) -> bool:
        """Delete a resource; returns False if it did not exist."""
