from tollgate_identity.infrastructure.persistence.sqlalchemy.repositories.credential_store import (  # NOQA: E501
    CredentialStoreSQLAlchemy,
)

__all__ = ["CredentialStoreSQLAlchemy"]
