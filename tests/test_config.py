"""Tests for the configuration module."""

import os
from unittest.mock import patch

import pytest

from app.config import ConfigurationError, Environment, Settings


class TestEnvironment:
    """Tests for Environment class."""

    def test_loads_from_environment(self):
        """Environment loads values from environment variables."""
        with patch.dict(os.environ, {
            "SECRET_KEY": "env-secret",
            "FLASK_ENV": "production",
            "DEBUG": "False",
            "MOBILE_API_KEY": "mobile-key",
            "SETTINGS_CACHE_TTL_SECONDS": "30",
        }, clear=False):
            env = Environment(_env_file=None)  # type: ignore[call-arg]

            assert env.SECRET_KEY == "env-secret"
            assert env.FLASK_ENV == "production"
            assert env.DEBUG is False
            assert env.MOBILE_API_KEY == "mobile-key"
            assert env.SETTINGS_CACHE_TTL_SECONDS == 30

    def test_defaults(self):
        """Unset variables fall back to development defaults."""
        with patch.dict(os.environ, {}, clear=True):
            env = Environment(_env_file=None)  # type: ignore[call-arg]

            assert env.FLASK_ENV == "development"
            assert env.AUTH_ENABLED is True
            assert env.SETTINGS_CACHE_TTL_SECONDS == 600
            assert env.MOBILE_API_KEY is None


class TestSettingsLoad:
    """Tests for Settings.load()."""

    def test_maps_environment_onto_settings(self):
        env = Environment(  # type: ignore[call-arg]
            _env_file=None,
            SECRET_KEY="secret",
            JWT_SECRET="jwt-secret",
            JWT_EXPIRE_HOURS=2,
            SSE_KEEPALIVE_SECONDS=5,
            PAGE_SIZE=25,
        )

        settings = Settings.load(env)

        assert settings.secret_key == "secret"
        assert settings.jwt_secret == "jwt-secret"
        assert settings.jwt_expire_hours == 2
        assert settings.sse_keepalive_seconds == 5
        assert settings.page_size == 25

    def test_empty_mobile_api_key_means_unset(self):
        env = Environment(_env_file=None, MOBILE_API_KEY="")  # type: ignore[call-arg]

        assert Settings.load(env).mobile_api_key is None

    def test_pool_options_for_postgres(self):
        env = Environment(  # type: ignore[call-arg]
            _env_file=None,
            DATABASE_URL="postgresql+psycopg://u:p@db:5432/fatigue",
            DB_POOL_SIZE=7,
        )

        options = Settings.load(env).sqlalchemy_engine_options

        assert options["pool_size"] == 7
        assert options["pool_pre_ping"] is True

    def test_no_pool_options_for_sqlite(self):
        env = Environment(_env_file=None, DATABASE_URL="sqlite://")  # type: ignore[call-arg]

        assert Settings.load(env).sqlalchemy_engine_options == {}


class TestProductionValidation:
    """Tests for Settings.validate_production_config()."""

    def test_development_skips_validation(self):
        settings = Settings(flask_env="development", debug=True)

        settings.validate_production_config()

    def test_default_secrets_rejected(self):
        settings = Settings(flask_env="production", debug=False, mobile_api_key="key")

        with pytest.raises(ConfigurationError) as exc_info:
            settings.validate_production_config()

        message = str(exc_info.value)
        assert "SECRET_KEY" in message
        assert "JWT_SECRET" in message
        assert "MOBILE_API_KEY" not in message

    def test_missing_mobile_api_key_rejected(self):
        settings = Settings(
            flask_env="production",
            debug=False,
            secret_key="prod-secret",
            jwt_secret="prod-jwt-secret",
        )

        with pytest.raises(ConfigurationError, match="MOBILE_API_KEY"):
            settings.validate_production_config()

    def test_jwt_secret_not_required_without_auth(self):
        settings = Settings(
            flask_env="production",
            debug=False,
            secret_key="prod-secret",
            auth_enabled=False,
            mobile_api_key="key",
        )

        settings.validate_production_config()

    def test_debug_off_counts_as_production(self):
        settings = Settings(flask_env="development", debug=False)

        assert settings.is_production is True


class TestFlaskConfig:
    """Tests for Settings.to_flask_config()."""

    def test_upload_limit_has_headroom(self):
        settings = Settings(csv_max_upload_bytes=1024)

        flask_config = settings.to_flask_config()

        assert flask_config.MAX_CONTENT_LENGTH > 1024
        assert flask_config.SQLALCHEMY_TRACK_MODIFICATIONS is False
