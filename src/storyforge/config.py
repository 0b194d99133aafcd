"""StoryForge configuration using Pydantic Settings."""

from functools import lru_cache

from pydantic import field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
    )

    # Environment
    environment: str = "development"
    log_level: str = "INFO"
    host: str = "0.0.0.0"
    port: int = 8080

    # Optional API key guarding upload grants (empty = open)
    api_key: str = ""

    # Document store
    database_url: str = "mongodb://localhost:27017"
    database_name: str = "storyforge"
    database_connect_timeout_seconds: int = 10

    # Object store
    aws_region: str = "us-east-1"
    aws_access_key_id: str = "test"
    aws_secret_access_key: str = "test"
    s3_bucket: str = "media"
    s3_endpoint: str = "http://localhost:4566"  # Service endpoint used for signing
    s3_public_url: str = "http://localhost:4566"  # Host handed to clients

    # Upload grants
    upload_url_expiry_minutes: int = 15

    @field_validator("s3_endpoint", "s3_public_url")
    @classmethod
    def _strip_trailing_slash(cls, value: str) -> str:
        return value.rstrip("/")

    @property
    def is_production(self) -> bool:
        """Check if running in production environment."""
        return self.environment == "production"


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
