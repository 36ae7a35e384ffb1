from tollgate.infrastructure.persistence.sqlalchemy.models import Base, ResourceModel
from tollgate.infrastructure.persistence.sqlalchemy.repositories import (
    ResourceRepositorySQLAlchemy,
)
from tollgate.infrastructure.persistence.sqlalchemy.scoping import apply_owner_scope

__all__ = [
    "Base",
    "ResourceModel",
    "ResourceRepositorySQLAlchemy",
    "apply_owner_scope",
]
