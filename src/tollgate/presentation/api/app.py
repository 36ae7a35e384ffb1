"""FastAPI application factory.

Creates and configures the FastAPI application with routers, middleware,
and exception handlers.

API Versioning:
    All API endpoints are versioned under /api/v1/ prefix.
    The health check endpoint remains unversioned at /health.

Run with:
    uvicorn tollgate.presentation.api.app:create_app --factory
"""

import logging
import sys
from contextlib import asynccontextmanager
from functools import lru_cache
from typing import AsyncGenerator

from fastapi import APIRouter, FastAPI
from fastapi.middleware.cors import CORSMiddleware
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from tollgate.application.services import AuthFacade, ResourceService
from tollgate.infrastructure.persistence.sqlalchemy import (
    Base,
    ResourceRepositorySQLAlchemy,
)
from tollgate.presentation.api.exception_handlers import setup_exception_handlers
from tollgate.presentation.api.routers import auth_router, resources_router
from tollgate_config.settings import Settings, get_settings
from tollgate_identity.infrastructure.persistence.sqlalchemy import (
    CredentialStoreSQLAlchemy,
    IdentityBase,
)

logger = logging.getLogger(__name__)

API_VERSION = "1.0.0"
API_V1_PREFIX = "/api/v1"


@lru_cache(maxsize=1)
def _configure_logging(log_level_name: str) -> None:
    """Configure application logging.

    Sets up console output with timestamps and module names, the
    configured level for tollgate modules, and WARNING for noisy
    third-party libraries.
    """
    log_level = getattr(logging, log_level_name.upper(), logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
        stream=sys.stdout,
        force=True,
    )

    for name in ("tollgate", "tollgate_auth", "tollgate_identity"):
        logging.getLogger(name).setLevel(log_level)

    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiosqlite").setLevel(logging.WARNING)
    logging.getLogger("asyncio").setLevel(logging.WARNING)


async def _init_database_schema(engine: AsyncEngine) -> None:
    """Initialize database schema (if not existent) and verify connectivity."""
    logger.info("Initializing database schema...")
    try:
        async with engine.begin() as conn:
            await conn.run_sync(IdentityBase.metadata.create_all)
            await conn.run_sync(Base.metadata.create_all)
    except ConnectionRefusedError:
        logger.critical("Could not connect to the database.")
        raise SystemExit(1) from None

    logger.info("Database schema initialized successfully")


def create_v1_router() -> APIRouter:
    v1_router = APIRouter()
    v1_router.include_router(auth_router, prefix="/auth", tags=["Authentication"])
    v1_router.include_router(
        resources_router,
        prefix="/resources",
        tags=["Resources"],
    )
    return v1_router


def create_app(
    settings: Settings | None = None,
    engine: AsyncEngine | None = None,
) -> FastAPI:
    """Create and configure the FastAPI application.

    Parameters
    ----------
    settings
        Optional settings override for testing.
    engine
        Optional engine override; by default one is created from
        ``settings.sqlalchemy_database_url``.

    Returns
    -------
    Configured FastAPI application instance.
    """
    if settings is None:
        settings = get_settings()

    _configure_logging(settings.log_level)

    if engine is None:
        engine = create_async_engine(
            settings.sqlalchemy_database_url,
            echo=False,
            pool_pre_ping=True,
        )
    session_maker = async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
    )

    @asynccontextmanager
    async def lifespan(_: FastAPI) -> AsyncGenerator[None, None]:
        logger.info("Starting %s API v%s...", settings.app_name, API_VERSION)
        await _init_database_schema(engine)
        yield

        logger.info("Shutting down %s API...", settings.app_name)
        await engine.dispose()
        logger.info("Database connections closed")

    app = FastAPI(
        title=f"{settings.app_name} API",
        description="Credential-based session management with rotating refresh tokens.",
        version=API_VERSION,
        docs_url="/docs" if settings.api_debug else None,
        redoc_url="/redoc" if settings.api_debug else None,
        openapi_url="/openapi.json" if settings.api_debug else None,
        lifespan=lifespan,
    )

    app.state.settings = settings
    app.state.session_maker = session_maker
    auth_facade = AuthFacade.from_settings(
        settings,
        CredentialStoreSQLAlchemy(session_maker),
    )
    app.state.auth_facade = auth_facade
    app.state.resource_service = ResourceService(
        ResourceRepositorySQLAlchemy(session_maker),
        auth_facade,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    setup_exception_handlers(app)

    app.include_router(create_v1_router(), prefix=API_V1_PREFIX)

    @app.get("/health", tags=["Health"])
    async def health_check() -> dict:
        """Health check endpoint.

        Unversioned for load balancer/monitoring compatibility.
        """
        return {
            "status": "healthy",
            "version": API_VERSION,
            "api_versions": ["v1"],
        }

    return app
