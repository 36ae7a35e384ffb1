"""Resource schemas for request/response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, model_validator

from tollgate.domain.resources import ResourceStatus


class ResourceCreateRequest(BaseModel):
    """Request schema for creating a resource. The owner is the caller."""

    title: str = Field(..., min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    content: str | None = None
    status: ResourceStatus = Field(default=ResourceStatus.DRAFT)
    category: str | None = Field(default=None, max_length=100)
    tags: list[str] = Field(default_factory=list, max_length=10)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "Quarterly report",
                "description": "Numbers for Q3",
                "status": "DRAFT",
                "category": "reports",
                "tags": ["finance"],
            },
        },
    )


class ResourceUpdateRequest(BaseModel):
    """Request schema for a partial update.

    Omitted fields are left unchanged. Nullable fields may be cleared by
    sending null explicitly.
    """

    title: str | None = Field(default=None, min_length=1, max_length=255)
    description: str | None = Field(default=None, max_length=1000)
    content: str | None = None
    status: ResourceStatus | None = None
    category: str | None = Field(default=None, max_length=100)
    tags: list[str] | None = Field(default=None, max_length=10)

    model_config = ConfigDict(
        json_schema_extra={
            "example": {"status": "PUBLISHED"},
        },
    )

    @model_validator(mode="after")
    def required_fields_not_cleared(self) -> "ResourceUpdateRequest":
        for name in ("title", "status", "tags"):
            if name in self.model_fields_set and getattr(self, name) is None:
                msg = f"{name} cannot be null"
                raise ValueError(msg)
        return self


class ResourceResponse(BaseModel):
    """Response schema for a single resource."""

    id: int
    owner_id: int = Field(..., description="Id of the owning user")
    title: str
    description: str | None = None
    content: str | None = None
    status: ResourceStatus
    category: str | None = None
    tags: list[str]
    created_at: datetime
    updated_at: datetime


class ResourceListResponse(BaseModel):
    """Paginated resource listing. ``total`` counts only visible rows."""

    items: list[ResourceResponse] = Field(..., description="Resources on this page")
    total: int = Field(..., description="Total number of visible resources")
    page: int = Field(..., description="Current page number")
    page_size: int = Field(..., description="Items per page")
    pages: int = Field(..., description="Total number of pages")
