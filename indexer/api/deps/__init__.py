"""API-specific dependencies."""

from .dependencies import (
    get_search_service,
    get_service_cache,
    get_settings_dependency,
)

__all__ = [
    "get_search_service",
    "get_service_cache",
    "get_settings_dependency",
]
