"""Actor context for request-scoped caller identity."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING

from tollgate_identity.domain.user import UserRole

if TYPE_CHECKING:
    from tollgate_auth import TokenClaims


@dataclass(frozen=True)
class ActorContext:
    """
    Immutable identity of the authenticated caller.

    Built once per request from verified access-token claims and handed to
    the authorization guard. The role is the one embedded at issue time;
    refresh always re-reads it from the store.
    """

    user_id: int
    email: str
    role: UserRole

    @classmethod
    def from_claims(cls, claims: TokenClaims) -> ActorContext:
        return cls(
            user_id=claims.user_id,
            email=claims.email,
            role=UserRole(claims.role),
        )

    @property
    def is_admin(self) -> bool:
        return self.role == UserRole.ADMIN

    def __str__(self) -> str:
        return f"ActorContext({self.user_id})"
