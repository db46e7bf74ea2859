"""Application settings loaded from environment variables.

Configuration file discovery (in priority order):
1. OS environment variables (always highest priority)
2. USERHUB_ENV_FILE environment variable (path to .env file)
3. config/.env.<ENVIRONMENT> - e.g. config/.env.development
4. config/.env - shared fallback

Uses pydantic-settings for automatic type coercion and validation.
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, computed_field, field_validator, model_validator
from pydantic_settings import BaseSettings, SettingsConfigDict
from sqlalchemy.engine import URL

Environment = Literal["development", "production", "stage", "provision"]


def _find_project_root() -> Path:
    """Find the project root directory."""
    current = Path(__file__).resolve().parent

    for parent in [current, *current.parents]:
        if (parent / "config").is_dir():
            return parent
        if (parent / ".git").is_dir():
            return parent

    return Path(__file__).resolve().parents[2]


def get_config_dir() -> Path:
    return _find_project_root() / "config"


def _resolve_env_file_path() -> Path | None:
    """Resolve the .env file path.

    Priority:
    1. USERHUB_ENV_FILE env var (absolute or relative to the project root)
    2. config/.env.<ENVIRONMENT> (defaults to development)
    3. config/.env
    """
    env_file_path = os.environ.get("USERHUB_ENV_FILE")
    if env_file_path:
        path = Path(env_file_path)
        if not path.is_absolute():
            path = _find_project_root() / path
        if path.exists():
            return path

    config_dir = get_config_dir()
    environment = os.environ.get("ENVIRONMENT", "development")

    env_specific = config_dir / f".env.{environment}"
    if env_specific.exists():
        return env_specific

    shared_env = config_dir / ".env"
    if shared_env.exists():
        return shared_env

    return None


class Settings(BaseSettings):
    """Application configuration loaded from environment variables.

    Values are loaded from:
    1. OS environment variables (highest priority)
    2. .env file (see module docstring)
    3. Default values

    Database access is configured either with the ``DB_*`` components
    (PostgreSQL via asyncpg) or with a complete ``DB_URL``.
    """

    model_config = SettingsConfigDict(
        env_file=_resolve_env_file_path(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # Application
    environment: Environment = "development"

    # Database (DB_ prefix)
    db_host: str | None = None
    db_port: int = 5432
    db_user: str | None = None
    db_password: SecretStr | None = None
    db_name: str | None = None
    db_ssl: bool = True
    db_url: str | None = None  # Full SQLAlchemy URL, overrides the components
    db_echo: bool = False

    # Credentials
    password_hash_rounds: int = Field(default=10, ge=4, le=31)
    password_min_length: int = Field(default=8, ge=1)

    # Logging (LOG_ prefix)
    log_level: str = "INFO"
    log_dir: Path | None = None

    @field_validator("log_level", mode="before")
    @classmethod
    def _normalize_log_level(cls, v: object) -> str:
        level = str(v).upper()
        if level not in {"DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}:
            msg = f"Unknown log level: {v}"
            raise ValueError(msg)
        return level

    @model_validator(mode="after")
    def _require_database(self) -> Settings:
        if self.db_url:
            return self
        missing = [
            name
            for name in ("db_host", "db_user", "db_password", "db_name")
            if getattr(self, name) in (None, "")
        ]
        if missing:
            msg = f"Database is not configured; set DB_URL or {', '.join(missing)}"
            raise ValueError(msg)
        return self

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        """Construct the database URL from components unless DB_URL is set."""
        if self.db_url:
            return self.db_url
        url = URL.create(
            "postgresql+asyncpg",
            username=self.db_user,
            password=self.db_password.get_secret_value() if self.db_password else None,
            host=self.db_host,
            port=self.db_port,
            database=self.db_name,
            query={"ssl": "require"} if self.db_ssl else {},
        )
        return url.render_as_string(hide_password=False)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"


@lru_cache()
def get_settings() -> Settings:
    """Return cached application settings."""
    return Settings()


def clear_settings_cache() -> None:
    """Clear the settings cache (useful for tests)."""
    get_settings.cache_clear()
