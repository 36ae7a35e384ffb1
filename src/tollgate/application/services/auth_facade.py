"""Single entry point the boundary layer talks to."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from tollgate.application.context import ActorContext
from tollgate.application.services.authorization_guard import (
    AuthorizationDecision,
    AuthorizationGuard,
)
from tollgate.application.services.session_manager import LoginResult, SessionManager
from tollgate.domain.shared.exceptions import AuthenticationError
from tollgate_auth import InvalidTokenError, JWTService, PasswordHasher, TokenPair

if TYPE_CHECKING:
    from tollgate_config import Settings
    from tollgate_identity.domain.user import CredentialStore, PublicUser

logger = logging.getLogger(__name__)


class AuthFacade:
    """
    Composition root for authentication and authorization.

    Wraps SessionManager for the session lifecycle, verifies bearer access
    tokens into an ActorContext, and delegates resource checks to the
    AuthorizationGuard. Holds no state of its own.
    """

    def __init__(
        self,
        session_manager: SessionManager,
        jwt_service: JWTService,
        guard: AuthorizationGuard | None = None,
    ):
        self._sessions = session_manager
        self._jwt_service = jwt_service
        self._guard = guard or AuthorizationGuard()

    @classmethod
    def from_settings(
        cls,
        settings: Settings,
        credential_store: CredentialStore,
    ) -> AuthFacade:
        """Build the service graph from configuration.

        Parameters
        ----------
        settings
            Application settings providing secrets, TTLs, and bcrypt cost
        credential_store
            Store used for all user reads and writes

        Returns
        -------
        A ready-to-use AuthFacade
        """
        jwt_service = JWTService(
            access_secret=settings.access_token_secret.get_secret_value(),
            refresh_secret=settings.refresh_token_secret.get_secret_value(),
            access_token_expire_minutes=settings.access_token_expire_minutes,
            refresh_token_expire_days=settings.refresh_token_expire_days,
        )
        session_manager = SessionManager(
            credential_store=credential_store,
            password_hasher=PasswordHasher(rounds=settings.bcrypt_rounds),
            jwt_service=jwt_service,
        )
        return cls(session_manager=session_manager, jwt_service=jwt_service)

    @property
    def guard(self) -> AuthorizationGuard:
        return self._guard

    async def register(
        self,
        email: str,
        password: str,
        display_name: str | None = None,
    ) -> PublicUser:
        return await self._sessions.register(email, password, display_name)

    async def login(self, email: str, password: str) -> LoginResult:
        return await self._sessions.login(email, password)

    async def refresh(self, refresh_token: str) -> TokenPair:
        return await self._sessions.refresh(refresh_token)

    async def logout(self, user_id: int) -> None:
        await self._sessions.logout(user_id)

    async def current_user(self, user_id: int) -> PublicUser:
        return await self._sessions.current_user(user_id)

    async def update_profile(
        self,
        user_id: int,
        display_name: str | None,
    ) -> PublicUser:
        return await self._sessions.update_profile(user_id, display_name)

    def authenticate(self, access_token: str) -> ActorContext:
        """Verify a bearer access token and return the caller's identity.

        Raises
        ------
        AuthenticationError
            If the token is not a valid, unexpired access token
        """
        try:
            claims = self._jwt_service.verify_access_token(access_token)
        except InvalidTokenError as e:
            logger.debug("Rejected access token: %s", e.message)
            raise AuthenticationError("Invalid or expired token") from e
        return ActorContext.from_claims(claims)

    def authorize(
        self,
        actor: ActorContext,
        resource_owner_id: int,
    ) -> AuthorizationDecision:
        """Raise AuthorizationError unless the actor may access the resource."""
        return self._guard.ensure_can_access(
            actor.role,
            actor.user_id,
            resource_owner_id,
        )
