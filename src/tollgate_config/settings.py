"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. TOLLGATE_ENV_FILE environment variable (path to a .env file)
3. config/.env.dev - local development
4. config/.env - production/Docker

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Any, Literal

from pydantic import SecretStr, computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

# HS256 keys shorter than this are rejected outright
MIN_SECRET_LENGTH = 32


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / ".git").is_dir():
            return parent
        if parent == Path("/app"):
            return parent

    return Path(__file__).resolve().parents[2]


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. TOLLGATE_ENV_FILE env var (full path)
    2. config/.env.dev (local development)
    3. config/.env (production)
    """
    env_file_path = os.environ.get("TOLLGATE_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = _find_project_root() / "config"

    dev_env = config_dir / ".env.dev"
    if dev_env.exists():
        return dev_env

    prod_env = config_dir / ".env"
    if prod_env.exists():
        return prod_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (config/.env.dev or config/.env)
    3. Default values
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Token signing (MUST be set - the two secrets must differ)
    access_token_secret: SecretStr
    refresh_token_secret: SecretStr

    # Application
    app_name: str = "Tollgate"
    app_env: Literal["development", "production"] = "production"

    # Token lifetimes
    access_token_expire_minutes: int = 15
    refresh_token_expire_days: int = 7

    # Password hashing work factor (log2 rounds)
    bcrypt_rounds: int = 12

    # Database: explicit URL wins over the POSTGRES_ components
    database_url: str | None = None
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: SecretStr = SecretStr("")
    postgres_db: str = "tollgate"

    # API (API_ prefix)
    api_debug: bool = False
    api_cors_origins: str = ""  # Empty = no CORS allowed (secure default)
    refresh_cookie_name: str = "refreshToken"

    # Logging (LOG_ prefix)
    log_level: str = "INFO"

    @field_validator("access_token_secret", "refresh_token_secret")
    @classmethod
    def _validate_secret(cls, v: SecretStr) -> SecretStr:
        value = v.get_secret_value()
        if not value or not value.strip():
            msg = "Token signing secrets must be set and non-empty"
            raise ValueError(msg)
        if len(value) < MIN_SECRET_LENGTH:
            msg = f"Token signing secrets must be at least {MIN_SECRET_LENGTH} characters"
            raise ValueError(msg)
        return v

    @field_validator("access_token_expire_minutes")
    @classmethod
    def _validate_access_ttl(cls, v: int) -> int:
        if v < 1 or v > 1440:
            msg = "ACCESS_TOKEN_EXPIRE_MINUTES must be between 1 and 1440"
            raise ValueError(msg)
        return v

    @field_validator("refresh_token_expire_days")
    @classmethod
    def _validate_refresh_ttl(cls, v: int) -> int:
        if v < 1 or v > 90:
            msg = "REFRESH_TOKEN_EXPIRE_DAYS must be between 1 and 90"
            raise ValueError(msg)
        return v

    @field_validator("bcrypt_rounds")
    @classmethod
    def _validate_bcrypt_rounds(cls, v: int) -> int:
        if v < 4 or v > 16:
            msg = "BCRYPT_ROUNDS must be between 4 and 16"
            raise ValueError(msg)
        return v

    @field_validator("api_cors_origins", mode="before")
    @classmethod
    def _validate_cors_origins(cls, v: Any) -> str:
        """Ensure cors_origins is stored as comma-separated string."""
        if isinstance(v, list):
            return ",".join(v)
        return str(v) if v else ""

    @model_validator(mode="after")
    def _validate_distinct_secrets(self) -> Settings:
        if (
            self.access_token_secret.get_secret_value()
            == self.refresh_token_secret.get_secret_value()
        ):
            msg = "ACCESS_TOKEN_SECRET and REFRESH_TOKEN_SECRET must differ"
            raise ValueError(msg)
        return self

    # Computed properties
    @computed_field  # type: ignore[prop-decorator]
    @property
    def sqlalchemy_database_url(self) -> str:
        """Database URL, built from the POSTGRES_ components unless overridden."""
        if self.database_url:
            return self.database_url
        return (
            f"postgresql+asyncpg://{self.postgres_user}:"
            f"{self.postgres_password.get_secret_value()}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @computed_field  # type: ignore[prop-decorator]
    @property
    def cors_origins(self) -> list[str]:
        """Parse CORS origins from comma-separated string."""
        return [o.strip() for o in self.api_cors_origins.split(",") if o.strip()]

    @property
    def cookie_secure(self) -> bool:
        """Refresh cookies are Secure everywhere except local development."""
        return self.app_env != "development"

    @property
    def refresh_cookie_max_age(self) -> int:
        """Cookie lifetime in seconds, matching the refresh token expiry."""
        return self.refresh_token_expire_days * 24 * 60 * 60


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings.

    Both token secrets must be provided via environment variables or
    .env file.
    """
    return Settings()  # type: ignore[call-arg]  # pydantic-settings loads from env


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
