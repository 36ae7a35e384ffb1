"""Root pytest configuration.

Test Structure:
    tests/
    ├── unit/            # Fast, isolated tests (mocked collaborators)
    │   ├── tollgate_auth/
    │   ├── tollgate_config/
    │   ├── domain/
    │   ├── application/
    │   └── presentation/
    └── integration/     # Tests against a file-backed SQLite database
        ├── persistence/
        └── api/

Test module names are unique across the tree (no __init__.py files).
"""

from collections.abc import Callable
from pathlib import Path
from typing import Any

import pytest
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine

from tollgate.infrastructure.persistence.sqlalchemy import (
    Base,
    ResourceRepositorySQLAlchemy,
)
from tollgate_config import Settings, clear_settings_cache
from tollgate_identity.infrastructure.persistence.sqlalchemy import (
    CredentialStoreSQLAlchemy,
    IdentityBase,
)

TEST_ACCESS_SECRET = "test-access-secret-0123456789-abcdefghij"  # NOQA: S105
TEST_REFRESH_SECRET = "test-refresh-secret-0123456789-abcdefghij"  # NOQA: S105


@pytest.fixture(autouse=True)
def reset_settings_cache():
    """Every test starts from a fresh settings cache."""
    clear_settings_cache()
    yield
    clear_settings_cache()


@pytest.fixture
def database_url(tmp_path: Path) -> str:
    return f"sqlite+aiosqlite:///{tmp_path / 'tollgate.db'}"


@pytest.fixture
def make_settings(database_url: str) -> Callable[..., Settings]:
    """Build Settings for tests: fast bcrypt, development cookies, SQLite."""

    def _make(**overrides: Any) -> Settings:
        values: dict[str, Any] = {
            "access_token_secret": TEST_ACCESS_SECRET,
            "refresh_token_secret": TEST_REFRESH_SECRET,
            "bcrypt_rounds": 4,
            "app_env": "development",
            "database_url": database_url,
            "log_level": "WARNING",
        }
        values.update(overrides)
        return Settings(**values)

    return _make


@pytest.fixture
def settings(make_settings) -> Settings:
    return make_settings()


@pytest.fixture
async def db_engine(database_url: str):
    """File-backed SQLite engine with the identity and resource schemas."""
    engine = create_async_engine(database_url, echo=False)

    async with engine.begin() as conn:
        await conn.run_sync(IdentityBase.metadata.create_all)
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(db_engine) -> async_sessionmaker[AsyncSession]:
    return async_sessionmaker(db_engine, class_=AsyncSession, expire_on_commit=False)


@pytest.fixture
def credential_store(session_maker) -> CredentialStoreSQLAlchemy:
    return CredentialStoreSQLAlchemy(session_maker)


@pytest.fixture
def resource_repository(session_maker) -> ResourceRepositorySQLAlchemy:
    return ResourceRepositorySQLAlchemy(session_maker)
