"""Authentication schemas for request/response models."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator

# bcrypt reads at most 72 bytes of input
PASSWORD_MAX_BYTES = 72


class RegisterRequest(BaseModel):
    """Request schema for user registration."""

    email: EmailStr = Field(..., description="User's email address")
    password: str = Field(
        ...,
        min_length=8,
        max_length=PASSWORD_MAX_BYTES,
        description="Password (at least 8 characters, at most 72 bytes as UTF-8)",
    )
    display_name: str | None = Field(
        default=None,
        max_length=255,
        description="Optional name shown in the UI",
    )

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "securepassword123",
                "display_name": "Jane Doe",
            },
        },
    )

    @field_validator("password")
    @classmethod
    def password_fits_bcrypt(cls, value: str) -> str:
        if len(value.encode("utf-8")) > PASSWORD_MAX_BYTES:
            msg = f"Password cannot exceed {PASSWORD_MAX_BYTES} bytes"
            raise ValueError(msg)
        return value


class LoginRequest(BaseModel):
    """Request schema for user login."""

    email: EmailStr
    password: str

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "email": "user@example.com",
                "password": "securepassword123",
            },
        },
    )


class UpdateProfileRequest(BaseModel):
    """Request schema for editing the caller's own profile.

    Only the display name is editable; email, role, and password are not.
    """

    display_name: str | None = Field(
        ...,
        max_length=255,
        description="New display name, or null to clear it",
    )

    model_config = ConfigDict(extra="forbid")


class UserResponse(BaseModel):
    """Response schema for user data."""

    id: int
    email: str
    display_name: str | None = None
    role: str
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class TokenResponse(BaseModel):
    """Response schema for token data.

    The refresh token is never part of the body; it travels in an
    HttpOnly cookie.
    """

    access_token: str
    token_type: str = Field(default="bearer")
    expires_in: int

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "access_token": "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9.eyJzdWIiOiIxIn0.xxx",
                "token_type": "bearer",
                "expires_in": 900,
            },
        },
    )


class AuthResponse(TokenResponse):
    """Response schema for login: the user plus an access token."""

    user: UserResponse


class MessageResponse(BaseModel):
    message: str
