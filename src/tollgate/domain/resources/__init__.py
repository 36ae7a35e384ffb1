"""Owner-scoped resources protected by the authorization guard."""

from tollgate.domain.resources.repository import ResourceRepository
from tollgate.domain.resources.resource import (
    Resource,
    ResourceChanges,
    ResourceDraft,
    ResourcePage,
    ResourceStatus,
)

__all__ = [
    "Resource",
    "ResourceChanges",
    "ResourceDraft",
    "ResourcePage",
    "ResourceRepository",
    "ResourceStatus",
]
