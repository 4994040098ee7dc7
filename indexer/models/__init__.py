"""
Request/response models.

Pydantic DTOs exchanged over HTTP, serialized with camelCase names.
"""

from indexer.models.common import ErrorResponse
from indexer.models.document import DocumentIndex
from indexer.models.search import DocumentSearchResult, SearchFilter, SearchResult

__all__ = [
    "DocumentIndex",
    "DocumentSearchResult",
    "ErrorResponse",
    "SearchFilter",
    "SearchResult",
]
