"""Environment-driven settings for the API server."""
from typing import List

from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_CORS_ORIGINS = ["http://localhost:5173", "http://localhost:8080"]


class Settings(BaseSettings):
    """Values read once from the environment (and .env) at import time."""

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    database_url: str = "sqlite:///./sahaya.db"

    jwt_secret: str = "dev-secret-change-me"
    jwt_algorithm: str = "HS256"
    access_token_expire_minutes: int = 1440
    bcrypt_rounds: int = 12

    port: int = 5000
    environment: str = Field("development", validation_alias="APP_ENV")
    debug_errors: bool = False
    upload_dir: str = "uploads"

    log_level: str = "INFO"
    log_format: str = "text"

    # Comma-separated; added to the local dev origins
    cors_origins_str: str = Field("", validation_alias="CORS_ORIGINS")

    @field_validator("database_url")
    @classmethod
    def normalise_postgres_scheme(cls, value: str) -> str:
        # Render/Heroku hand out postgres:// but SQLAlchemy needs postgresql://
        if value.startswith("postgres://"):
            return value.replace("postgres://", "postgresql://", 1)
        return value

    @field_validator("log_level")
    @classmethod
    def upper_case_level(cls, value: str) -> str:
        return value.upper()

    @field_validator("log_format")
    @classmethod
    def lower_case_format(cls, value: str) -> str:
        return value.lower()

    @property
    def cors_origins(self) -> List[str]:
        origins = list(DEFAULT_CORS_ORIGINS)
        for origin in self.cors_origins_str.split(","):
            origin = origin.strip()
            if origin and origin not in origins:
                origins.append(origin)
        return origins

    @property
    def is_development(self) -> bool:
        return self.environment == "development"

    @property
    def expose_tracebacks(self) -> bool:
        """Stack traces are only ever returned in a development diagnostic run."""
        return self.is_development and self.debug_errors


settings = Settings()
