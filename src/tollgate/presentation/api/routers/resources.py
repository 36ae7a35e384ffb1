"""Resources router: owner-scoped CRUD endpoints.

Every endpoint requires a bearer access token. ADMIN callers see and edit
all resources; everyone else only their own.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Query, Response, status

from tollgate.domain.resources import (
    Resource,
    ResourceChanges,
    ResourceDraft,
    ResourceStatus,
)
from tollgate.presentation.api.dependencies import CurrentActor, ResourceServiceDep
from tollgate.presentation.api.schemas.resources import (
    ResourceCreateRequest,
    ResourceListResponse,
    ResourceResponse,
    ResourceUpdateRequest,
)

logger = logging.getLogger(__name__)

router = APIRouter()

PageFilter = Annotated[int, Query(ge=1, description="Page number")]
PageSizeFilter = Annotated[int, Query(ge=1, le=100, description="Items per page")]
# Aliased: the parameter cannot be called status next to fastapi.status
StatusFilter = Annotated[
    ResourceStatus | None,
    Query(alias="status", description="DRAFT, PUBLISHED, or ARCHIVED"),
]
CategoryFilter = Annotated[str | None, Query(description="Filter by category")]


def _resource_to_response(resource: Resource) -> ResourceResponse:
    return ResourceResponse(
        id=resource.id,
        owner_id=resource.owner_id,
        title=resource.title,
        description=resource.description,
        content=resource.content,
        status=resource.status,
        category=resource.category,
        tags=resource.tags,
        created_at=resource.created_at,
        updated_at=resource.updated_at,
    )


@router.get(
    "",
    summary="List resources",
    responses={
        200: {"description": "One page of visible resources"},
        401: {"description": "Not authenticated"},
    },
)
async def list_resources(  # NOQA: PLR0913
    actor: CurrentActor,
    service: ResourceServiceDep,
    page: PageFilter = 1,
    page_size: PageSizeFilter = 20,
    status_filter: StatusFilter = None,
    category: CategoryFilter = None,
) -> ResourceListResponse:
    """
    List resources, newest first.

    Non-admin callers only see resources they own; ``total`` and ``pages``
    count only those.
    """
    result = await service.list_resources(
        actor,
        page=page,
        page_size=page_size,
        status=status_filter,
        category=category,
    )
    return ResourceListResponse(
        items=[_resource_to_response(r) for r in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        pages=result.pages,
    )


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create a resource",
    responses={
        201: {"description": "Resource created, owned by the caller"},
        401: {"description": "Not authenticated"},
    },
)
async def create_resource(
    request: ResourceCreateRequest,
    actor: CurrentActor,
    service: ResourceServiceDep,
) -> ResourceResponse:
    draft = ResourceDraft(
        title=request.title,
        status=request.status,
        description=request.description,
        content=request.content,
        category=request.category,
        tags=request.tags,
    )
    resource = await service.create_resource(actor, draft)
    return _resource_to_response(resource)


@router.get(
    "/{resource_id}",
    summary="Get a resource",
    responses={
        200: {"description": "Resource found"},
        401: {"description": "Not authenticated"},
        403: {"description": "Resource belongs to another user"},
        404: {"description": "Resource not found"},
    },
)
async def get_resource(
    resource_id: int,
    actor: CurrentActor,
    service: ResourceServiceDep,
) -> ResourceResponse:
    resource = await service.get_resource(actor, resource_id)
    return _resource_to_response(resource)


@router.put(
    "/{resource_id}",
    summary="Update a resource",
    responses={
        200: {"description": "Resource updated"},
        401: {"description": "Not authenticated"},
        403: {"description": "Resource belongs to another user"},
        404: {"description": "Resource not found"},
    },
)
async def update_resource(
    resource_id: int,
    request: ResourceUpdateRequest,
    actor: CurrentActor,
    service: ResourceServiceDep,
) -> ResourceResponse:
    """Apply a partial update. Only fields present in the body change."""
    changes = ResourceChanges(request.model_dump(exclude_unset=True))
    resource = await service.update_resource(actor, resource_id, changes)
    return _resource_to_response(resource)


@router.delete(
    "/{resource_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a resource",
    responses={
        204: {"description": "Resource deleted"},
        401: {"description": "Not authenticated"},
        403: {"description": "Resource belongs to another user"},
        404: {"description": "Resource not found"},
    },
)
async def delete_resource(
    resource_id: int,
    actor: CurrentActor,
    service: ResourceServiceDep,
) -> Response:
    await service.delete_resource(actor, resource_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
