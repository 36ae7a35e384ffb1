from tollgate.presentation.api.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
    UpdateProfileRequest,
    UserResponse,
)
from tollgate.presentation.api.schemas.resources import (
    ResourceCreateRequest,
    ResourceListResponse,
    ResourceResponse,
    ResourceUpdateRequest,
)

__all__ = [
    "AuthResponse",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "ResourceCreateRequest",
    "ResourceListResponse",
    "ResourceResponse",
    "ResourceUpdateRequest",
    "TokenResponse",
    "UpdateProfileRequest",
    "UserResponse",
]
