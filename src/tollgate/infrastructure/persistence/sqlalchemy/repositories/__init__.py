from tollgate.infrastructure.persistence.sqlalchemy.repositories.resource_repository import (  # NOQA: E501
    ResourceRepositorySQLAlchemy,
)

__all__ = ["ResourceRepositorySQLAlchemy"]
