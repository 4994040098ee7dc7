"""Application services."""

from indexer.application.services.search_service import SearchService

__all__ = ["SearchService"]
