"""Client configuration using Pydantic Settings.

All configuration is loaded from environment variables.
No credentials are read here; boto3 resolves those itself.
"""

from enum import Enum
from functools import lru_cache

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict

# Service limit on vectors per PutVectors / DeleteVectors request
MAX_WRITE_BATCH_SIZE = 500


class Environment(str, Enum):
    """Application environment."""

    DEVELOPMENT = "development"
    STAGING = "staging"
    PRODUCTION = "production"


class AWSSettings(BaseSettings):
    """Connection settings for the S3 Vectors API."""

    model_config = SettingsConfigDict(env_prefix="AWS_")

    region: str | None = Field(
        default=None,
        description="AWS region (falls back to the boto3 default chain)",
    )
    profile: str | None = Field(
        default=None,
        description="Named AWS profile to build the session from",
    )
    endpoint_url: str | None = Field(
        default=None,
        description="Override endpoint (local emulators, VPC endpoints)",
    )


class IndexSettings(BaseSettings):
    """Defaults applied to Index handles."""

    model_config = SettingsConfigDict(env_prefix="VECTOR_INDEX_")

    bucket: str | None = Field(
        default=None,
        description="Default vector bucket name",
    )
    batch_size: int = Field(
        default=MAX_WRITE_BATCH_SIZE,
        ge=1,
        le=MAX_WRITE_BATCH_SIZE,
        description="Vectors per write request",
    )


class Settings(BaseSettings):
    """Main settings.

    Aggregates all configuration sections.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    environment: Environment = Field(
        default=Environment.DEVELOPMENT,
        description="Application environment",
    )
    log_level: str = Field(
        default="INFO",
        description="Logging level",
    )
    debug: bool = Field(
        default=False,
        description="Enable debug mode",
    )

    # Nested settings
    aws: AWSSettings = Field(default_factory=AWSSettings)
    index: IndexSettings = Field(default_factory=IndexSettings)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings.

    Returns:
        Settings instance loaded from environment.
    """
    return Settings()
