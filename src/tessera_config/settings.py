"""Identity service settings.

Values come from OS environment variables first, then from the first env file
found among:

- the path in ``TESSERA_ENV_FILE`` (relative paths resolve from the project root)
- ``config/.env.dev``
- ``config/.env``
"""

from __future__ import annotations

import os
from functools import lru_cache
from pathlib import Path

from pydantic import Field, SecretStr, computed_field
from pydantic_settings import BaseSettings, SettingsConfigDict

ENV_FILE_VARIABLE = "TESSERA_ENV_FILE"


def _project_root() -> Path:
    here = Path(__file__).resolve()
    for candidate in here.parents:
        if (candidate / "pyproject.toml").is_file() or (candidate / "config").is_dir():
            return candidate
    return here.parents[2]


def _env_file() -> Path | None:
    root = _project_root()

    explicit = os.environ.get(ENV_FILE_VARIABLE)
    if explicit:
        path = Path(explicit)
        path = path if path.is_absolute() else root / path
        if path.is_file():
            return path

    for name in (".env.dev", ".env"):
        path = root / "config" / name
        if path.is_file():
            return path
    return None


class Settings(BaseSettings):
    """Identity store connection and storage behaviour."""

    model_config = SettingsConfigDict(
        env_file=_env_file(),
        env_file_encoding="utf-8",
        extra="ignore",
    )

    # PostgreSQL connection parts
    postgres_host: str = "localhost"
    postgres_port: int = 5432
    postgres_user: str = "postgres"
    postgres_password: SecretStr | None = None
    postgres_db: str = "tessera"

    # Full SQLAlchemy URL; wins over the POSTGRES_* parts when set
    database_dsn: str | None = None
    database_echo: bool = False

    # Unit of work limits
    storage_timeout_seconds: float = Field(default=5.0, gt=0)
    storage_transient_retries: int = Field(default=1, ge=0)
    sqlite_busy_timeout_seconds: float = Field(default=30.0, gt=0)

    log_level: str = "INFO"

    @computed_field  # type: ignore[prop-decorator]
    @property
    def database_url(self) -> str:
        if self.database_dsn:
            return self.database_dsn

        password = self.postgres_password.get_secret_value() if self.postgres_password else ""
        return (
            f"postgresql+asyncpg://{self.postgres_user}:{password}"
            f"@{self.postgres_host}:{self.postgres_port}/{self.postgres_db}"
        )

    @property
    def database_type(self) -> str:
        return "sqlite" if self.database_url.startswith("sqlite") else "postgresql"


@lru_cache
def get_settings() -> Settings:
    return Settings()


def clear_settings_cache() -> None:
    """Forget the cached settings so the next call re-reads the environment."""
    get_settings.cache_clear()
