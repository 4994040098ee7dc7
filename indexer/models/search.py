"""
Search domain models and schemas.

Query-string filter and the search result envelope.

Dependencies: pydantic
System role: Search API contracts
"""

from pydantic import Field

from indexer.models.common import CamelModel
from indexer.models.document import DocumentIndex


class SearchFilter(CamelModel):
    """Query-string filter accepted by the search endpoints."""

    query: str = Field(default="*", description="Full Lucene query text")
    page: int = Field(default=0, ge=0, description="Zero-based page number")
    limit: int = Field(default=0, ge=0, description="Page size, 0 for the service default")


class SearchResult(CamelModel):
    """Single search hit."""

    score: float = 0.0
    highlights: dict[str, list[str]] = Field(default_factory=dict)
    document: DocumentIndex


class DocumentSearchResult(CamelModel):
    """Search response envelope."""

    results: list[SearchResult] = Field(default_factory=list)
    number_of_results: int = 0
    elapsed_milliseconds: int = 0
