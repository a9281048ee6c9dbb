"""
Configuration settings for the storefront API.

Loads environment variables from .env file and provides typed configuration.
Signing secret and admin bootstrap code have no defaults: the application
refuses to start without them.
"""

from typing import List
from pydantic_settings import BaseSettings
from pydantic import Field


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    # API Configuration
    CORS_ORIGINS: List[str] = Field(
        default=["http://localhost:5173", "http://localhost:3000"],
        description="Allowed CORS origins",
    )

    # Security Configuration
    JWT_SECRET: str = Field(
        ..., min_length=16, description="Secret key used to sign access tokens"
    )
    ADMIN_CREATION_CODE: str = Field(
        ..., min_length=1, description="Shared code required to create admins"
    )
    ACCESS_TOKEN_EXPIRE_MINUTES: int = Field(
        default=60 * 24 * 7, description="Access token expiration time in minutes"
    )
    BCRYPT_ROUNDS: int = Field(
        default=12, ge=4, le=31, description="bcrypt work factor"
    )
    RATE_LIMIT_ENABLED: bool = Field(
        default=True, description="Enable rate limiting on login endpoints"
    )
    LOGIN_RATE_LIMIT: str = Field(
        default="5/minute", description="Rate limit applied to login endpoints"
    )

    # Database Configuration
    DATABASE_URL: str = Field(
        default="sqlite:///./data/storefront.db", description="Database URL"
    )
    DATABASE_ECHO: bool = Field(
        default=False, description="Echo SQL queries (for debugging)"
    )
    DB_POOL_TIMEOUT: int = Field(
        default=5, description="Seconds to wait for a pooled connection"
    )
    STORAGE_RETRY_ATTEMPTS: int = Field(
        default=3, ge=1, description="Attempts for transient storage errors"
    )
    STORAGE_RETRY_DELAY: float = Field(
        default=0.1, ge=0, description="Initial backoff between storage retries"
    )

    # Logging Configuration
    LOG_LEVEL: str = Field(default="INFO", description="Logging level")

    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = False


# Global settings instance
settings = Settings()
