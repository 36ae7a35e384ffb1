from tollgate.application.services.auth_facade import AuthFacade
from tollgate.application.services.authorization_guard import (
    AuthorizationDecision,
    AuthorizationGuard,
    DecisionReason,
)
from tollgate.application.services.resource_service import ResourceService
from tollgate.application.services.session_manager import LoginResult, SessionManager

__all__ = [
    "AuthFacade",
    "AuthorizationDecision",
    "AuthorizationGuard",
    "DecisionReason",
    "LoginResult",
    "ResourceService",
    "SessionManager",
]
