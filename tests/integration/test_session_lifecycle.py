"""End-to-end session lifecycle through AuthFacade and a real SQLite store."""

import asyncio

import pytest

from tollgate.application.services import AuthFacade
from tollgate.domain.shared.exceptions import AuthenticationError, ConflictError
from tollgate_auth import PasswordHasher
from tollgate_identity.domain.user import UserRole

EMAIL = "alice@example.com"
PASSWORD = "correct horse battery"


@pytest.fixture
def facade(settings, credential_store) -> AuthFacade:
    return AuthFacade.from_settings(settings, credential_store)


@pytest.fixture
def hasher() -> PasswordHasher:
    return PasswordHasher(rounds=4)


@pytest.mark.integration
class TestSessionLifecycle:
    async def test_register_creates_user_without_session(
        self,
        facade,
        credential_store,
    ):
        public = await facade.register(EMAIL, PASSWORD, "Alice")

        stored = await credential_store.find_by_email(EMAIL)
        assert public.role == UserRole.USER
        assert public.display_name == "Alice"
        assert stored.refresh_token_hash is None

    async def test_register_twice_conflicts(self, facade):
        await facade.register(EMAIL, PASSWORD)

        with pytest.raises(ConflictError):
            await facade.register(EMAIL, "another password")

    async def test_wrong_password_leaves_session_empty(self, facade, credential_store):
        await facade.register(EMAIL, PASSWORD)

        with pytest.raises(AuthenticationError):
            await facade.login(EMAIL, "wrong password!")

        stored = await credential_store.find_by_email(EMAIL)
        assert stored.refresh_token_hash is None

    async def test_login_stores_hash_of_issued_refresh_token(
        self,
        facade,
        credential_store,
        hasher,
    ):
        await facade.register(EMAIL, PASSWORD)

        result = await facade.login(EMAIL, PASSWORD)

        stored = await credential_store.find_by_email(EMAIL)
        assert stored.refresh_token_hash is not None
        assert stored.refresh_token_hash != result.tokens.refresh_token
        assert hasher.verify_token(
            result.tokens.refresh_token,
            stored.refresh_token_hash,
        )

    async def test_rotation_invalidates_previous_refresh_token(self, facade):
        await facade.register(EMAIL, PASSWORD)
        r0 = (await facade.login(EMAIL, PASSWORD)).tokens.refresh_token

        r1 = (await facade.refresh(r0)).refresh_token

        with pytest.raises(AuthenticationError):
            await facade.refresh(r0)
        r2 = (await facade.refresh(r1)).refresh_token
        assert len({r0, r1, r2}) == 3

    async def test_second_login_supersedes_first_session(self, facade):
        await facade.register(EMAIL, PASSWORD)
        first = (await facade.login(EMAIL, PASSWORD)).tokens.refresh_token
        second = (await facade.login(EMAIL, PASSWORD)).tokens.refresh_token

        with pytest.raises(AuthenticationError):
            await facade.refresh(first)
        await facade.refresh(second)

    async def test_logout_then_refresh_fails(self, facade, credential_store):
        user = await facade.register(EMAIL, PASSWORD)
        refresh = (await facade.login(EMAIL, PASSWORD)).tokens.refresh_token

        await facade.logout(user.id)
        await facade.logout(user.id)

        assert (await credential_store.find_by_id(user.id)).refresh_token_hash is None
        with pytest.raises(AuthenticationError):
            await facade.refresh(refresh)

    async def test_access_token_is_not_a_refresh_token(self, facade):
        await facade.register(EMAIL, PASSWORD)
        tokens = (await facade.login(EMAIL, PASSWORD)).tokens

        with pytest.raises(AuthenticationError):
            await facade.refresh(tokens.access_token)
        with pytest.raises(AuthenticationError):
            facade.authenticate(tokens.refresh_token)

    async def test_admin_session_may_access_any_owner(
        self,
        facade,
        credential_store,
        hasher,
    ):
        admin = await credential_store.create(
            "root@example.com",
            hasher.hash(PASSWORD),
            UserRole.ADMIN,
        )
        login = await facade.login(admin.email, PASSWORD)

        actor = facade.authenticate(login.tokens.access_token)

        assert actor.role == UserRole.ADMIN
        assert facade.authorize(actor, resource_owner_id=admin.id + 100).allowed

    async def test_concurrent_refresh_has_single_winner(self, facade):
        await facade.register(EMAIL, PASSWORD)
        refresh = (await facade.login(EMAIL, PASSWORD)).tokens.refresh_token

        results = await asyncio.gather(
            facade.refresh(refresh),
            facade.refresh(refresh),
            return_exceptions=True,
        )

        successes = [r for r in results if not isinstance(r, BaseException)]
        failures = [r for r in results if isinstance(r, AuthenticationError)]
        assert len(successes) == 1
        assert len(failures) == 1

    async def test_current_user_returns_public_projection(self, facade):
        user = await facade.register(EMAIL, PASSWORD)
        await facade.login(EMAIL, PASSWORD)

        profile = await facade.current_user(user.id)

        assert profile.email == EMAIL
        assert not hasattr(profile, "password_hash")
        assert not hasattr(profile, "refresh_token_hash")
