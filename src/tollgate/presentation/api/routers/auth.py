"""Authentication router for registration, login, and session management."""

import logging

from fastapi import APIRouter, Request, Response, status

from tollgate.domain.shared.exceptions import AuthenticationError
from tollgate.presentation.api.dependencies import (
    AuthFacadeDep,
    CurrentActor,
    SettingsDep,
)
from tollgate.presentation.api.schemas.auth import (
    AuthResponse,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenResponse,
    UpdateProfileRequest,
    UserResponse,
)
from tollgate_config.settings import Settings
from tollgate_identity.domain.user import PublicUser

logger = logging.getLogger(__name__)

router = APIRouter()

REFRESH_COOKIE_PATH = "/"


def _set_refresh_token_cookie(
    response: Response,
    token: str,
    settings: Settings,
) -> None:
    """Set the refresh token as an HttpOnly cookie.

    This cookie is:
    - HttpOnly: Not accessible to JavaScript
    - Secure: Only sent over HTTPS outside development
    - SameSite strict: Never sent on cross-site requests
    """
    response.set_cookie(
        key=settings.refresh_cookie_name,
        value=token,
        httponly=True,
        secure=settings.cookie_secure,
        samesite="strict",
        max_age=settings.refresh_cookie_max_age,
        path=REFRESH_COOKIE_PATH,
    )


def _clear_refresh_token_cookie(response: Response, settings: Settings) -> None:
    """Clear the refresh token cookie (for logout)."""
    response.delete_cookie(
        key=settings.refresh_cookie_name,
        path=REFRESH_COOKIE_PATH,
        secure=settings.cookie_secure,
        httponly=True,
        samesite="strict",
    )


def _user_response(user: PublicUser) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        display_name=user.display_name,
        role=user.role.value,
        created_at=user.created_at,
        updated_at=user.updated_at,
    )


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    responses={
        201: {"description": "User registered successfully"},
        400: {"description": "Email already registered or weak password"},
    },
)
async def register(request: RegisterRequest, facade: AuthFacadeDep) -> UserResponse:
    """
    Create a new account with role USER.

    Registration does not log the user in; call /login afterwards.
    """
    user = await facade.register(
        email=request.email,
        password=request.password,
        display_name=request.display_name,
    )
    return _user_response(user)


@router.post(
    "/login",
    summary="Authenticate user",
    responses={
        200: {"description": "Login successful"},
        401: {"description": "Invalid credentials"},
    },
)
async def login(
    request: LoginRequest,
    response: Response,
    facade: AuthFacadeDep,
    settings: SettingsDep,
) -> AuthResponse:
    """
    Authenticate with email and password.

    Returns an access token on successful authentication.
    The refresh token is set as an HttpOnly cookie.
    """
    result = await facade.login(email=request.email, password=request.password)

    _set_refresh_token_cookie(response, result.tokens.refresh_token, settings)

    return AuthResponse(
        user=_user_response(result.user),
        access_token=result.tokens.access_token,
        expires_in=result.tokens.access_expires_in,
    )


@router.post(
    "/refresh",
    summary="Refresh access token",
    responses={
        200: {"description": "Tokens refreshed successfully"},
        401: {"description": "Missing, invalid, or expired refresh token"},
    },
)
async def refresh_token(
    request: Request,
    response: Response,
    facade: AuthFacadeDep,
    settings: SettingsDep,
) -> TokenResponse:
    """
    Get a new access token using the refresh token cookie.

    The presented refresh token is retired and a new one is set as an
    HttpOnly cookie (token rotation).
    """
    token = request.cookies.get(settings.refresh_cookie_name)
    if not token:
        msg = "No refresh token provided"
        raise AuthenticationError(msg)

    tokens = await facade.refresh(token)

    _set_refresh_token_cookie(response, tokens.refresh_token, settings)

    return TokenResponse(
        access_token=tokens.access_token,
        expires_in=tokens.access_expires_in,
    )


@router.post(
    "/logout",
    summary="Logout user",
    responses={
        200: {"description": "Logged out successfully"},
        401: {"description": "Not authenticated"},
    },
)
async def logout(
    response: Response,
    actor: CurrentActor,
    facade: AuthFacadeDep,
    settings: SettingsDep,
) -> MessageResponse:
    """End the caller's session and clear the refresh token cookie."""
    await facade.logout(actor.user_id)
    _clear_refresh_token_cookie(response, settings)
    return MessageResponse(message="Logged out successfully")


@router.get(
    "/profile",
    summary="Get current user",
    responses={
        200: {"description": "Current user data"},
        401: {"description": "Not authenticated"},
        404: {"description": "User no longer exists"},
    },
)
async def get_profile(actor: CurrentActor, facade: AuthFacadeDep) -> UserResponse:
    """
    Get the current authenticated user's information.

    Requires a valid access token in the Authorization header.
    """
    user = await facade.current_user(actor.user_id)
    return _user_response(user)


@router.put(
    "/profile",
    summary="Update current user",
    responses={
        200: {"description": "Updated user data"},
        401: {"description": "Not authenticated"},
        404: {"description": "User no longer exists"},
    },
)
async def update_profile(
    request: UpdateProfileRequest,
    actor: CurrentActor,
    facade: AuthFacadeDep,
) -> UserResponse:
    """
    Change the caller's display name.

    Role, email, and password cannot be changed here; unknown fields are
    rejected.
    """
    user = await facade.update_profile(actor.user_id, request.display_name)
    return _user_response(user)
