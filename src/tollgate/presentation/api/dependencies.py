"""FastAPI dependency injection for the Tollgate API.

Everything is read from ``app.state``, which ``create_app`` populates, so
tests can build isolated apps with their own settings and database.
"""

import logging
from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from tollgate.application.context import ActorContext
from tollgate.application.services import AuthFacade, ResourceService
from tollgate.domain.shared.exceptions import AuthenticationError
from tollgate_config.settings import Settings

logger = logging.getLogger(__name__)

# Security scheme for JWT Bearer tokens
security = HTTPBearer(auto_error=False)


def get_api_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_auth_facade(request: Request) -> AuthFacade:
    return request.app.state.auth_facade


def get_resource_service(request: Request) -> ResourceService:
    return request.app.state.resource_service


SettingsDep = Annotated[Settings, Depends(get_api_settings)]
AuthFacadeDep = Annotated[AuthFacade, Depends(get_auth_facade)]
ResourceServiceDep = Annotated[ResourceService, Depends(get_resource_service)]


def get_current_actor(
    facade: AuthFacadeDep,
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
) -> ActorContext:
    """
    FastAPI dependency resolving the caller from the bearer access token.

    Raises
    ------
    AuthenticationError
        If no token is supplied, or it is not a valid access token
    """
    if credentials is None:
        raise AuthenticationError("Authentication required")
    return facade.authenticate(credentials.credentials)


# Type alias for injected caller identity
CurrentActor = Annotated[ActorContext, Depends(get_current_actor)]
