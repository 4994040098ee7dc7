"""
Azure AI Search configuration settings.

Service name, index name and admin key used to reach the managed search
service. The index is only touched when both service name and key are set.

Dependencies: pydantic, pydantic_settings
System role: Search service connection configuration
"""

from pydantic import Field
from pydantic_settings import BaseSettings, SettingsConfigDict


class AzureSearchSettings(BaseSettings):
    """Azure AI Search service configuration."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        env_prefix="AZURE_SEARCH_",
        case_sensitive=False,
        extra="ignore",
    )

    service_name: str = Field(default="", description="Azure Search service name")
    index_name: str = Field(default="documents", description="Name of the search index")
    api_key: str = Field(default="", description="Admin API key for the search service")
    endpoint_override: str | None = Field(
        default=None,
        validation_alias="azure_search_endpoint",
        description="Full service endpoint, overrides the one derived from service_name",
    )

    @property
    def endpoint(self) -> str:
        """
        Construct the search service endpoint.

        Returns:
            str: HTTPS endpoint of the search service
        """
        if self.endpoint_override:
            return self.endpoint_override.rstrip("/")
        return f"https://{self.service_name}.search.windows.net"

    @property
    def is_configured(self) -> bool:
        """True when both service name and API key are set."""
        return bool(self.service_name.strip()) and bool(self.api_key.strip())
