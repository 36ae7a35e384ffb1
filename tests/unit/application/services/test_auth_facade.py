"""Unit tests for AuthFacade."""

from unittest.mock import AsyncMock, Mock

import pytest

from tollgate.application.context import ActorContext
from tollgate.application.services import AuthFacade, SessionManager
from tollgate.domain.shared.exceptions import AuthenticationError, AuthorizationError
from tollgate_auth import JWTService, TokenSubject
from tollgate_identity.domain.user import CredentialStore, UserRole

ACCESS_SECRET = "facade-access-secret-0123456789-abcdefghij"
REFRESH_SECRET = "facade-refresh-secret-0123456789-abcdefghij"


class TestAuthFacadeDelegation:
    def setup_method(self):
        self.sessions = AsyncMock(spec=SessionManager)
        self.jwt_service = JWTService(ACCESS_SECRET, REFRESH_SECRET)
        self.facade = AuthFacade(self.sessions, self.jwt_service)

    async def test_session_operations_delegate(self):
        await self.facade.register("a@example.com", "password123", "A")
        await self.facade.login("a@example.com", "password123")
        await self.facade.refresh("refresh-token")
        await self.facade.logout(3)
        await self.facade.current_user(3)

        self.sessions.register.assert_awaited_once_with(
            "a@example.com",
            "password123",
            "A",
        )
        self.sessions.login.assert_awaited_once_with("a@example.com", "password123")
        self.sessions.refresh.assert_awaited_once_with("refresh-token")
        self.sessions.logout.assert_awaited_once_with(3)
        self.sessions.current_user.assert_awaited_once_with(3)


class TestAuthenticate:
    def setup_method(self):
        self.jwt_service = JWTService(ACCESS_SECRET, REFRESH_SECRET)
        self.facade = AuthFacade(Mock(spec=SessionManager), self.jwt_service)
        self.subject = TokenSubject(user_id=5, email="m@example.com", role="MODERATOR")

    def test_valid_access_token_yields_actor(self):
        token = self.jwt_service.create_access_token(self.subject)

        actor = self.facade.authenticate(token)

        assert actor == ActorContext(5, "m@example.com", UserRole.MODERATOR)
        assert actor.is_admin is False

    def test_refresh_token_rejected_as_bearer(self):
        token = self.jwt_service.create_refresh_token(self.subject)

        with pytest.raises(AuthenticationError):
            self.facade.authenticate(token)

    def test_garbage_rejected(self):
        with pytest.raises(AuthenticationError, match="Invalid or expired token"):
            self.facade.authenticate("not-a-jwt")


class TestAuthorize:
    def setup_method(self):
        self.facade = AuthFacade(
            Mock(spec=SessionManager),
            JWTService(ACCESS_SECRET, REFRESH_SECRET),
        )

    def test_owner_allowed(self):
        actor = ActorContext(1, "u@example.com", UserRole.USER)

        assert self.facade.authorize(actor, 1).allowed is True

    def test_non_owner_denied(self):
        actor = ActorContext(2, "u@example.com", UserRole.USER)

        with pytest.raises(AuthorizationError):
            self.facade.authorize(actor, 1)

    def test_admin_allowed_for_any_owner(self):
        actor = ActorContext(2, "admin@example.com", UserRole.ADMIN)

        assert self.facade.authorize(actor, 1).allowed is True


class TestFromSettings:
    def test_builds_working_graph(self, make_settings):
        settings = make_settings(access_token_expire_minutes=5)
        store = AsyncMock(spec=CredentialStore)

        facade = AuthFacade.from_settings(settings, store)

        # A token minted with the configured access secret is accepted
        token = JWTService(
            settings.access_token_secret.get_secret_value(),
            settings.refresh_token_secret.get_secret_value(),
        ).create_access_token(TokenSubject(1, "a@example.com", "USER"))
        assert facade.authenticate(token).user_id == 1
