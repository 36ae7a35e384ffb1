"""Authentication services.

Provides password hashing and JWT token management.
"""

from tollgate_auth.services.jwt_service import JWTService
from tollgate_auth.services.password_service import PasswordHasher
from tollgate_auth.services.token_codec import TokenCodec

__all__ = [
    "JWTService",
    "PasswordHasher",
    "TokenCodec",
]
