"""Resource entity and the value objects used to create, edit, and list it."""

import math
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Any


class ResourceStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    ARCHIVED = "ARCHIVED"


@dataclass(frozen=True)
class Resource:
    """A record owned by exactly one user.

    ``owner_id`` is set from the creating actor and never changes.
    """

    id: int
    owner_id: int
    title: str
    status: ResourceStatus
    description: str | None = None
    content: str | None = None
    category: str | None = None
    tags: list[str] = field(default_factory=list)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True)
class ResourceDraft:
    """Fields supplied when creating a resource. The owner is not one of them."""

    title: str
    status: ResourceStatus = ResourceStatus.DRAFT
    description: str | None = None
    content: str | None = None
    category: str | None = None
    tags: list[str] = field(default_factory=list)


@dataclass(frozen=True)
class ResourceChanges:
    """Partial update: only the fields present in ``values`` are written."""

    values: dict[str, Any]

    EDITABLE_FIELDS = frozenset(
        {"title", "status", "description", "content", "category", "tags"},
    )

    def __post_init__(self) -> None:
        unknown = set(self.values) - self.EDITABLE_FIELDS
        if unknown:
            msg = f"Fields not editable: {', '.join(sorted(unknown))}"
            raise ValueError(msg)

    @property
    def is_empty(self) -> bool:
        return not self.values


@dataclass(frozen=True)
class ResourcePage:
    """One page of a listing, with the total over all visible rows."""

    items: list[Resource]
    total: int
    page: int
    page_size: int

    @property
    def pages(self) -> int:
        return max(1, math.ceil(self.total / self.page_size))
