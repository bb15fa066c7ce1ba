"""
Configuration management for Portfolio Admin.
"""

from typing import List, Optional

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings.

    Every field can be overridden by the upper-cased environment variable of
    the same name (``DATABASE_URL``, ``SECRET_KEY``, ...) or from ``.env``.
    """

    model_config = SettingsConfigDict(
        env_file=".env", env_file_encoding="utf-8", extra="ignore"
    )

    # Application
    app_name: str = Field(default="Portfolio Admin")
    debug: bool = Field(default=False)
    environment: str = Field(default="development")

    # API
    api_host: str = Field(default="0.0.0.0")
    api_port: int = Field(default=8000)
    api_workers: int = Field(default=1)
    cors_origins: str = Field(
        default="*",
        description="Comma-separated list of allowed CORS origins.",
    )

    # Database
    database_url: str = Field(default="sqlite:///./portfolio_admin.db")

    # Security
    secret_key: str = Field(default="change-me-in-production")
    jwt_algorithm: str = Field(default="HS256")
    access_token_expire_minutes: int = Field(default=60 * 12)

    # Object storage
    storage_uri: str = Field(
        default="file://./storage",
        description="Root URI for uploaded files. Only file:// is supported.",
    )
    storage_public_base_url: Optional[str] = Field(
        default=None,
        description="Public base URL that serves the storage root, if any.",
    )

    # Logging
    log_level: str = Field(default="INFO")
    log_format: str = Field(default="json")

    def cors_origin_list(self) -> List[str]:
        return [o.strip() for o in self.cors_origins.split(",") if o.strip()]


# Global settings instance
settings = Settings()


def get_settings() -> Settings:
    """Get application settings."""
    return settings
