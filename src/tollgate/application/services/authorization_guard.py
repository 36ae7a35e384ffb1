"""Role and ownership checks for protected resources."""

import logging
from dataclasses import dataclass
from enum import Enum

from tollgate.domain.shared.exceptions import AuthorizationError
from tollgate_identity.domain.user import UserRole

logger = logging.getLogger(__name__)


class DecisionReason(str, Enum):
    ADMIN_OVERRIDE = "ADMIN_OVERRIDE"
    OWNER = "OWNER"
    NOT_OWNER = "NOT_OWNER"


@dataclass(frozen=True)
class AuthorizationDecision:
    allowed: bool
    reason: DecisionReason


class AuthorizationGuard:
    """
    Decides whether an actor may act on a resource.

    ADMIN may access any resource. Every other role, MODERATOR included,
    may access only resources it owns. The guard is stateless and reads
    nothing from storage; callers pass the current role and owner id on
    every call.
    """

    def decide(
        self,
        actor_role: UserRole,
        actor_id: int,
        resource_owner_id: int,
    ) -> AuthorizationDecision:
        if actor_role == UserRole.ADMIN:
            return AuthorizationDecision(True, DecisionReason.ADMIN_OVERRIDE)
        if actor_id == resource_owner_id:
            return AuthorizationDecision(True, DecisionReason.OWNER)
        return AuthorizationDecision(False, DecisionReason.NOT_OWNER)

    def can_access(
        self,
        actor_role: UserRole,
        actor_id: int,
        resource_owner_id: int,
    ) -> bool:
        return self.decide(actor_role, actor_id, resource_owner_id).allowed

    def ensure_can_access(
        self,
        actor_role: UserRole,
        actor_id: int,
        resource_owner_id: int,
    ) -> AuthorizationDecision:
        """Raise AuthorizationError unless the actor may access the resource.

        The error message does not reveal whether the resource exists or
        who owns it.
        """
        decision = self.decide(actor_role, actor_id, resource_owner_id)
        if not decision.allowed:
            logger.info(
                "Access denied for user %s (role: %s) to resource of %s",
                actor_id,
                actor_role.value,
                resource_owner_id,
            )
            raise AuthorizationError(details={"reason": decision.reason.value})
        return decision

    def owner_scope(self, actor_role: UserRole, actor_id: int) -> int | None:
        """Owner id a listing must be filtered by, or None for no filter."""
        if actor_role == UserRole.ADMIN:
            return None
        return actor_id
