"""Azure AI Search adapters."""

from indexer.boundary.search.azure_search_store import AzureSearchStore, VendorSearchPage
from indexer.boundary.search.index_schema import (
    build_index_definition,
    from_index_document,
    to_index_document,
)

__all__ = [
    "AzureSearchStore",
    "VendorSearchPage",
    "build_index_definition",
    "from_index_document",
    "to_index_document",
]
