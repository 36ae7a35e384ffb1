"""Session lifecycle: registration, login, refresh rotation, and logout."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass

from tollgate.application.services.storage_errors import storage_failures
from tollgate.domain.shared.exceptions import (
    AuthenticationError,
    ConflictError,
    ErrorCode,
    NotFoundError,
    ValidationError,
)
from tollgate_auth import (
    InvalidTokenError,
    JWTService,
    PasswordHasher,
    TokenPair,
    TokenSubject,
    WeakPasswordError,
)
from tollgate_identity.domain.user import (
    CredentialStore,
    EmailAlreadyExistsError,
    PublicUser,
    User,
    UserRole,
    to_public_user,
)

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"
INVALID_REFRESH_MESSAGE = "Invalid or expired refresh token"


@dataclass(frozen=True)
class LoginResult:
    """Public user data plus the freshly issued token pair."""

    user: PublicUser
    tokens: TokenPair


class SessionManager:
    """
    Application service owning the per-user session state.

    A user has at most one active session, represented by the hash of the
    most recently issued refresh token. Login overwrites it, refresh
    rotates it, and logout clears it. Every outward result is a
    PublicUser, never the stored User.

    bcrypt work runs in a worker thread (asyncio.to_thread).
    """

    def __init__(
        self,
        credential_store: CredentialStore,
        password_hasher: PasswordHasher,
        jwt_service: JWTService,
    ):
        self._store = credential_store
        self._hasher = password_hasher
        self._jwt_service = jwt_service

    async def register(
        self,
        email: str,
        password: str,
        display_name: str | None = None,
    ) -> PublicUser:
        """Create a new USER account with no active session.

        Raises
        ------
        ConflictError
            If the email is already registered
        ValidationError
            If the password does not meet strength requirements
        """
        with storage_failures("register"):
            if await self._store.find_by_email(email) is not None:
                raise ConflictError("Email already registered")

            try:
                password_hash = await asyncio.to_thread(self._hasher.hash, password)
            except WeakPasswordError as e:
                raise ValidationError(e.message) from e

            try:
                user = await self._store.create(
                    email=email,
                    password_hash=password_hash,
                    role=UserRole.USER,
                    display_name=display_name,
                )
            except EmailAlreadyExistsError as e:
                raise ConflictError("Email already registered") from e

        logger.info("User registered: %s (id: %s)", email, user.id)
        return to_public_user(user)

    async def login(self, email: str, password: str) -> LoginResult:
        """Verify credentials and start a new session.

        Unknown email and wrong password are indistinguishable to the
        caller, in message and in timing.

        Raises
        ------
        AuthenticationError
            If the credentials are not valid
        """
        with storage_failures("login"):
            user = await self._store.find_by_email(email)
            if user is None:
                await asyncio.to_thread(self._hasher.equalize_timing, password)
                raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

            if not await asyncio.to_thread(
                self._hasher.verify,
                password,
                user.password_hash,
            ):
                raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

            tokens = self._jwt_service.create_token_pair(self._subject_for(user))
            refresh_hash = await asyncio.to_thread(
                self._hasher.hash_token,
                tokens.refresh_token,
            )
            await self._store.set_refresh_hash(user.id, refresh_hash)

        logger.info("User logged in: %s", user.id)
        return LoginResult(user=to_public_user(user), tokens=tokens)

    async def refresh(self, refresh_token: str) -> TokenPair:
        """Exchange the current refresh token for a new pair.

        The presented token must be the one most recently issued to the
        user. On success the stored hash is swapped atomically, so the
        presented token stops working.

        Raises
        ------
        AuthenticationError
            If the token is invalid, expired, superseded, or the session
            was ended
        """
        try:
            claims = self._jwt_service.verify_refresh_token(refresh_token)
        except InvalidTokenError as e:
            raise AuthenticationError(INVALID_REFRESH_MESSAGE) from e

        with storage_failures("refresh"):
            user = await self._store.find_by_id(claims.user_id)
            if user is None:
                logger.warning("Refresh for unknown user %s", claims.user_id)
                raise AuthenticationError(INVALID_REFRESH_MESSAGE)

            stored_hash = user.refresh_token_hash
            if stored_hash is None:
                logger.warning("Refresh for user %s without active session", user.id)
                raise AuthenticationError(INVALID_REFRESH_MESSAGE)

            if not await asyncio.to_thread(
                self._hasher.verify_token,
                refresh_token,
                stored_hash,
            ):
                logger.warning("Stale refresh token presented for user %s", user.id)
                raise AuthenticationError(INVALID_REFRESH_MESSAGE)

            tokens = self._jwt_service.create_token_pair(self._subject_for(user))
            new_hash = await asyncio.to_thread(
                self._hasher.hash_token,
                tokens.refresh_token,
            )
            swapped = await self._store.compare_and_set_refresh_hash(
                user.id,
                expected=stored_hash,
                new=new_hash,
            )
            if not swapped:
                logger.warning("Concurrent refresh lost for user %s", user.id)
                raise AuthenticationError(INVALID_REFRESH_MESSAGE)

        logger.debug("Tokens refreshed for user: %s", user.id)
        return tokens

    async def logout(self, user_id: int) -> None:
        """End the user's session. Calling it again is harmless."""
        with storage_failures("logout"):
            await self._store.set_refresh_hash(user_id, None)
        logger.info("User logged out: %s", user_id)

    async def current_user(self, user_id: int) -> PublicUser:
        with storage_failures("current_user"):
            user = await self._store.find_by_id(user_id)
        if user is None:
            raise NotFoundError("User not found", ErrorCode.USER_NOT_FOUND)
        return to_public_user(user)

    async def update_profile(
        self,
        user_id: int,
        display_name: str | None,
    ) -> PublicUser:
        """Change the user's display name.

        Email, role, and password are not editable through this path.

        Raises
        ------
        NotFoundError
            If the user no longer exists
        """
        with storage_failures("update_profile"):
            user = await self._store.update_display_name(user_id, display_name)
        if user is None:
            raise NotFoundError("User not found", ErrorCode.USER_NOT_FOUND)
        logger.info("Profile updated for user: %s", user_id)
        return to_public_user(user)

    @staticmethod
    def _subject_for(user: User) -> TokenSubject:
        return TokenSubject(user_id=user.id, email=user.email, role=user.role.value)
