"""Tollgate Auth - Generic authentication infrastructure.

This package provides authentication infrastructure that is independent
of any specific user model or storage. It handles:
- Password and refresh-token hashing (bcrypt)
- JWT token creation and verification

Architecture:
    tollgate_auth/
    ├── services/           # Pure logic (hashing, token codec, JWT)
    ├── schemas.py          # Data classes
    └── exceptions.py       # Auth exceptions

Usage:
    from tollgate_auth import JWTService, PasswordHasher
"""

from tollgate_auth.exceptions import (
    AuthError,
    InvalidTokenError,
    WeakPasswordError,
)
from tollgate_auth.schemas import TokenClaims, TokenPair, TokenSubject
from tollgate_auth.services import JWTService, PasswordHasher, TokenCodec

__all__ = [
    # Services
    "JWTService",
    "PasswordHasher",
    "TokenCodec",
    # Schemas
    "TokenClaims",
    "TokenPair",
    "TokenSubject",
    # Exceptions
    "AuthError",
    "InvalidTokenError",
    "WeakPasswordError",
]
