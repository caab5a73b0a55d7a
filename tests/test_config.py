"""Tests for environment-driven settings."""
from sahaya_api.config import DEFAULT_CORS_ORIGINS, Settings


class TestSettings:

    def test_defaults(self, monkeypatch):
        for name in ("DATABASE_URL", "APP_ENV", "DEBUG_ERRORS", "CORS_ORIGINS", "LOG_LEVEL"):
            monkeypatch.delenv(name, raising=False)
        settings = Settings(_env_file=None)

        assert settings.database_url == "sqlite:///./sahaya.db"
        assert settings.environment == "development"
        assert settings.cors_origins == DEFAULT_CORS_ORIGINS
        assert settings.expose_tracebacks is False

    def test_postgres_scheme_normalised(self, monkeypatch):
        monkeypatch.setenv("DATABASE_URL", "postgres://sahaya:pw@db:5432/sahaya")
        assert Settings(_env_file=None).database_url == "postgresql://sahaya:pw@db:5432/sahaya"

    def test_cors_origins_appended_once(self, monkeypatch):
        monkeypatch.setenv("CORS_ORIGINS", "https://sahaya.example.org, http://localhost:5173,")
        assert Settings(_env_file=None).cors_origins == DEFAULT_CORS_ORIGINS + ["https://sahaya.example.org"]

    def test_tracebacks_only_in_development_with_debug(self, monkeypatch):
        monkeypatch.setenv("DEBUG_ERRORS", "true")
        monkeypatch.setenv("APP_ENV", "production")
        assert Settings(_env_file=None).expose_tracebacks is False

        monkeypatch.setenv("APP_ENV", "development")
        assert Settings(_env_file=None).expose_tracebacks is True

    def test_log_settings_normalised(self, monkeypatch):
        monkeypatch.setenv("LOG_LEVEL", "debug")
        monkeypatch.setenv("LOG_FORMAT", "JSON")
        settings = Settings(_env_file=None)
        assert settings.log_level == "DEBUG"
        assert settings.log_format == "json"
