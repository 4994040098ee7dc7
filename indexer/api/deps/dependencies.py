"""
Dependency injection container.

Factory functions for FastAPI dependencies.

Dependencies: indexer.configs, indexer.application, indexer.boundary
System role: DI container for service injection
"""

from functools import lru_cache

from indexer.application.services import SearchService
from indexer.boundary.search import AzureSearchStore
from indexer.configs import Settings, get_settings


class ServiceCache:
    """Container for cached service instances."""

    def __init__(self):
        self._search_store = None
        self._store_initialized = False

    @property
    def search_store(self) -> AzureSearchStore | None:
        """Get cached search store, None when the search service is not configured."""
        if not self._store_initialized:
            search_settings = get_settings().azure_search
            if search_settings.is_configured:
                self._search_store = AzureSearchStore(
                    endpoint=search_settings.endpoint,
                    index_name=search_settings.index_name,
                    api_key=search_settings.api_key,
                )
            self._store_initialized = True
        return self._search_store

    async def aclose(self) -> None:
        """Close and drop all cached instances."""
        if self._search_store is not None:
            await self._search_store.close()
        self.clear()

    def clear(self) -> None:
        """Clear all cached instances."""
        self._search_store = None
        self._store_initialized = False


# Global service cache
_service_cache = ServiceCache()


def get_service_cache() -> ServiceCache:
    """Get service cache singleton."""
    return _service_cache


@lru_cache
def get_settings_dependency() -> Settings:
    """Get settings singleton."""
    return get_settings()


def get_search_service() -> SearchService:
    """
    Get search service instance.

    Returns:
        SearchService: Search service backed by the cached search store
    """
    cache = get_service_cache()
    return SearchService(
        store=cache.search_store,
        settings=get_settings().azure_search,
    )
