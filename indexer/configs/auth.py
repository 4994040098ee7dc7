"""
Authorization configuration settings.

Static security token for service-to-service calls and the OAuth
authority/audience used to validate bearer tokens.

Dependencies: pydantic_settings
System role: Request authorization configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AuthSettings(BaseSettings):
    """Security token and OAuth configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",
    )

    security_token: str = Field(
        default="",
        description="Static token accepted with the SecureToken scheme",
    )
    oauth_authority: str = Field(
        default="",
        description="OpenID Connect authority issuing bearer tokens",
    )
    oauth_audience: str = Field(
        default="",
        description="Expected audience of bearer tokens",
    )
    jwks_cache_seconds: int = Field(
        default=300,
        description="How long signing keys from the authority are cached",
    )
