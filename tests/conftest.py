"""
Shared test fixtures and configuration for entire test suite.

Provides: search store mocks, configured settings, cache resets
Dependencies: pytest, fastapi
System role: Test infrastructure and fixture management
"""

from unittest.mock import AsyncMock, MagicMock

import pytest

from indexer.api.auth import reset_bearer_verifiers
from indexer.api.deps.dependencies import get_service_cache, get_settings_dependency
from indexer.boundary.search import AzureSearchStore
from indexer.configs import get_settings
from indexer.configs.azure_search import AzureSearchSettings
from indexer.models import DocumentIndex


@pytest.fixture(autouse=True)
def reset_caches():
    """Drop cached settings, services and verifiers around every test."""
    get_settings.cache_clear()
    get_settings_dependency.cache_clear()
    get_service_cache().clear()
    reset_bearer_verifiers()
    yield
    get_settings.cache_clear()
    get_settings_dependency.cache_clear()
    get_service_cache().clear()
    reset_bearer_verifiers()


@pytest.fixture
def search_settings() -> AzureSearchSettings:
    """Search settings with service name and key configured."""
    return AzureSearchSettings(
        service_name="docs-search",
        index_name="documents",
        api_key="admin-key",
        _env_file=None,
    )


@pytest.fixture
def unconfigured_search_settings() -> AzureSearchSettings:
    """Search settings without credentials."""
    return AzureSearchSettings(service_name="", api_key="", _env_file=None)


@pytest.fixture
def mock_store():
    """
    Create mock AzureSearchStore for testing.

    Returns:
        MagicMock: Mocked store with async methods
    """
    store = MagicMock(spec=AzureSearchStore)
    store.create_or_update_index = AsyncMock()
    store.merge_or_upload = AsyncMock(return_value=[])
    store.delete = AsyncMock(return_value=[])
    store.search = AsyncMock()
    store.close = AsyncMock()
    return store


@pytest.fixture
def sample_documents() -> list[DocumentIndex]:
    """Two documents of the same branch."""
    return [
        DocumentIndex(
            id="doc-1",
            url="master/docs/index.md",
            title="Index",
            project_id="project-a",
            project_name="Project A",
            branch_name="master",
            content="Welcome to the documentation",
            tags=["intro"],
        ),
        DocumentIndex(
            id="doc-2",
            url="master/docs/install.md",
            title="Install",
            content="Run the installer",
        ),
    ]


def async_iter(items):
    """Wrap a list in an async generator."""

    async def _gen():
        for item in items:
            yield item

    return _gen()


@pytest.fixture
def make_async_iter():
    """Factory turning a list into an async generator."""
    return async_iter
