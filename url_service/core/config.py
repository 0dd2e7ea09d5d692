"""Application configuration module.

This module contains settings for the URL service, loaded from
environment variables with appropriate defaults.
"""

from __future__ import annotations

from enum import Enum
from typing import Optional

from pydantic import AliasChoices, Field, computed_field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class EnvironmentType(str, Enum):
    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"
    TESTING = "testing"


class Settings(BaseSettings):
    """Application settings loaded from environment variables with defaults.

    Settings are loaded from environment variables, with fallback to
    values in .env file if present, and finally to the default values
    specified here.
    """
    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore"
    )

    ENVIRONMENT: EnvironmentType = EnvironmentType.DEVELOPMENT

    # App Information
    APP_NAME: str = "URL Service"
    APP_VERSION: str = "0.1.0"
    APP_DESCRIPTION: str = "Deterministic URL shortening with click tracking"

    # API Configuration
    API_PREFIX: str = "/api/v1"
    DEBUG: bool = False
    SERVER_HOST: str = "0.0.0.0"
    SERVER_PORT: int = 8081

    # Short code and validation limits
    SHORT_CODE_LENGTH: int = 10
    URL_MAX_LENGTH: int = 2048

    # Pagination
    DEFAULT_PAGE_SIZE: int = 10
    MAX_PAGE_SIZE: int = 100

    # Seconds to wait for pending click updates on shutdown
    SHUTDOWN_TIMEOUT_SECONDS: float = 30.0

    # PostgreSQL settings
    POSTGRES_SERVER: str = Field(default="localhost", validation_alias=AliasChoices("DB_HOST", "POSTGRES_SERVER"))
    POSTGRES_PORT: int = Field(default=5432, validation_alias=AliasChoices("DB_PORT", "POSTGRES_PORT"))
    POSTGRES_USER: str = Field(default="postgres", validation_alias=AliasChoices("DB_USER", "POSTGRES_USER"))
    POSTGRES_PASSWORD: str = Field(default="postgres", validation_alias=AliasChoices("DB_PASSWORD", "POSTGRES_PASSWORD"))
    POSTGRES_DB: str = Field(default="url_service", validation_alias=AliasChoices("DB_NAME", "POSTGRES_DB"))

    # Full override, e.g. "sqlite+aiosqlite:///./urls.db"
    DATABASE_URL: Optional[str] = None

    # PostgreSQL pool settings
    POSTGRES_POOL_SIZE: int = 20
    POSTGRES_POOL_MAX_OVERFLOW: int = 10
    POSTGRES_POOL_TIMEOUT: int = 30
    POSTGRES_POOL_RECYCLE: int = 300
    DB_ECHO: bool = False

    # Logging configuration
    LOG_LEVEL: str = "INFO"
    LOG_DIR: str = "logs"
    LOG_FILENAME: str = "app.log"
    LOG_ROTATION: str = "10 MB"
    LOG_RETENTION: str = "7 days"
    LOG_FORMAT: str = "{time:YYYY-MM-DD HH:mm:ss.SSS} | {level} | {name}:{line} | {message}"
    LOG_JSON: bool = True
    LOG_TO_FILE: bool = False
    REQUEST_LOGGING_ENABLED: bool = True

    @field_validator("DATABASE_URL", mode="before")
    def empty_database_url_is_none(cls, v: Optional[str]) -> Optional[str]:
        """Treat an empty DATABASE_URL as unset."""
        if isinstance(v, str) and not v.strip():
            return None
        return v

    @field_validator("SHORT_CODE_LENGTH")
    def validate_short_code_length(cls, v: int) -> int:
        # urls.short_code is VARCHAR(10)
        if not 1 <= v <= 10:
            raise ValueError("SHORT_CODE_LENGTH must be between 1 and 10")
        return v

    @field_validator("MAX_PAGE_SIZE")
    def validate_max_page_size(cls, v: int) -> int:
        if v < 1:
            raise ValueError("MAX_PAGE_SIZE must be at least 1")
        return v

    @computed_field
    def SQLALCHEMY_DATABASE_URI(self) -> str:
        """Construct the SQLAlchemy database URI from settings or use override."""
        if self.DATABASE_URL:
            return self.DATABASE_URL
        return (
            f"postgresql+asyncpg://{self.POSTGRES_USER}:{self.POSTGRES_PASSWORD}"
            f"@{self.POSTGRES_SERVER}:{self.POSTGRES_PORT}/{self.POSTGRES_DB}"
        )


settings = Settings()
