"""Token schemas and data structures.

These are simple data classes used for transferring token data
between components.
"""

from dataclasses import dataclass
from datetime import datetime

ACCESS_TOKEN_TYPE = "access"  # NOQA: S105
REFRESH_TOKEN_TYPE = "refresh"  # NOQA: S105


@dataclass(frozen=True)
class TokenSubject:
    """Identity claims embedded into every issued token."""

    user_id: int
    email: str
    role: str


@dataclass(frozen=True)
class TokenClaims:
    """Decoded JWT token payload.

    This represents the data extracted from a verified JWT token.

    Attributes
    ----------
    user_id
        The numeric identifier of the user
    email
        The user's email address
    role
        The user's role at the time of issuance
    token_id
        Random per-token identifier (``jti``)
    issued_at
        Token issuance timestamp
    expires_at
        Token expiration timestamp
    token_type
        Either "access" or "refresh"
    """

    user_id: int
    email: str
    role: str
    token_id: str
    issued_at: datetime
    expires_at: datetime
    token_type: str

    def is_expired(self) -> bool:
        """Check if the token has expired."""
        return datetime.now(tz=self.expires_at.tzinfo) > self.expires_at

    def is_access_token(self) -> bool:
        return self.token_type == ACCESS_TOKEN_TYPE

    def is_refresh_token(self) -> bool:
        return self.token_type == REFRESH_TOKEN_TYPE


@dataclass(frozen=True)
class TokenPair:
    """A freshly issued access/refresh token pair."""

    access_token: str
    refresh_token: str
    access_expires_in: int  # seconds

    def __repr__(self) -> str:
        return f"TokenPair(access_expires_in={self.access_expires_in})"
