"""
Shared settings for the indexer service.

Every settings class reads the same ``.env`` file. The deployment
environment decides whether the interactive API docs are exposed.

Dependencies: pydantic_settings
System role: Base class of the indexer configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings as PydanticBaseSettings, SettingsConfigDict

PRODUCTION = "production"


class BaseSettings(PydanticBaseSettings):
    """Settings read from the environment and ``.env``."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    environment: str = Field(default="development", description="Deployment environment name")
    debug: bool = Field(default=False, description="Reload the server on code changes")
    log_level: str = Field(default="INFO", description="Root logging level")

    @property
    def is_production(self) -> bool:
        return self.environment.strip().lower() == PRODUCTION
