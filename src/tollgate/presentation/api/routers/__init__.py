from tollgate.presentation.api.routers.auth import router as auth_router
from tollgate.presentation.api.routers.resources import router as resources_router

__all__ = ["auth_router", "resources_router"]
