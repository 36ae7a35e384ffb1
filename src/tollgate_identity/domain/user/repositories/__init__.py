from tollgate_identity.domain.user.repositories.credential_store import (
    CredentialStore,
)

__all__ = ["CredentialStore"]
