"""Tests for Settings and logging configuration."""

import logging

import pytest
from pydantic import ValidationError

from tessera_config import Settings, configure_logging, get_settings


class TestSettings:
    def test_postgres_url_from_parts(self):
        settings = Settings(
            _env_file=None,
            postgres_host="db",
            postgres_port=5433,
            postgres_user="tessera",
            postgres_password="secret",
            postgres_db="identity",
        )

        assert settings.database_url == "postgresql+asyncpg://tessera:secret@db:5433/identity"
        assert settings.database_type == "postgresql"

    def test_dsn_overrides_parts(self):
        settings = Settings(_env_file=None, database_dsn="sqlite+aiosqlite:///./t.db")

        assert settings.database_url == "sqlite+aiosqlite:///./t.db"
        assert settings.database_type == "sqlite"

    def test_storage_defaults(self):
        settings = Settings(_env_file=None)

        assert settings.storage_timeout_seconds == 5.0
        assert settings.storage_transient_retries == 1

    def test_environment_variables(self, monkeypatch):
        monkeypatch.setenv("STORAGE_TIMEOUT_SECONDS", "2.5")
        monkeypatch.setenv("POSTGRES_PASSWORD", "from-env")

        settings = get_settings()

        assert settings.storage_timeout_seconds == 2.5
        assert settings.postgres_password.get_secret_value() == "from-env"
        assert get_settings() is settings

    @pytest.mark.parametrize(
        "overrides",
        [{"storage_timeout_seconds": 0}, {"storage_transient_retries": -1}],
    )
    def test_invalid_storage_values(self, overrides):
        with pytest.raises(ValidationError):
            Settings(_env_file=None, **overrides)


class TestConfigureLogging:
    def test_levels(self):
        configure_logging(Settings(_env_file=None, log_level="debug"))

        assert logging.getLogger("tessera_identity").level == logging.DEBUG
        assert logging.getLogger("sqlalchemy.engine").level == logging.WARNING
