from tollgate.infrastructure.persistence.sqlalchemy.models.base import Base
from tollgate.infrastructure.persistence.sqlalchemy.models.resource_model import (
    ResourceModel,
)

__all__ = ["Base", "ResourceModel"]
