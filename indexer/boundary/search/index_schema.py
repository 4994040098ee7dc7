"""
Search index schema and document mapping.

Defines the field list of the managed index and converts between the
DocumentIndex DTO and the plain dicts the search SDK sends and receives.

Dependencies: azure-search-documents
System role: Index schema definition for Azure AI Search
"""

from typing import Any

from azure.search.documents.indexes.models import (
    SearchableField,
    SearchFieldDataType,
    SearchIndex,
    SimpleField,
)

from indexer.models.document import DocumentIndex

KEY_FIELD = "id"

# DTO attribute -> index field name
INDEX_FIELDS: dict[str, str] = {
    "id": "id",
    "url": "url",
    "title": "title",
    "project_id": "projectId",
    "project_name": "projectName",
    "branch_name": "branchName",
    "content": "content",
    "tags": "tags",
}


def build_index_definition(index_name: str) -> SearchIndex:
    """
    Build the index definition pushed to the search service on startup.

    Args:
        index_name: Name of the index to create or update

    Returns:
        SearchIndex: Index definition with the document field list
    """
    fields = [
        SimpleField(name="id", type=SearchFieldDataType.String, key=True),
        SimpleField(name="url", type=SearchFieldDataType.String),
        SimpleField(name="title", type=SearchFieldDataType.String),
        SimpleField(name="projectId", type=SearchFieldDataType.String, filterable=True),
        SimpleField(name="projectName", type=SearchFieldDataType.String, filterable=True),
        SimpleField(name="branchName", type=SearchFieldDataType.String, filterable=True),
        SimpleField(
            name="tags",
            type=SearchFieldDataType.Collection(SearchFieldDataType.String),
            filterable=True,
            facetable=True,
        ),
        SearchableField(name="content", hidden=True),
    ]
    return SearchIndex(name=index_name, fields=fields)


def to_index_document(document: DocumentIndex) -> dict[str, Any]:
    """Map a DocumentIndex DTO onto the index field names."""
    return {
        field_name: getattr(document, attribute)
        for attribute, field_name in INDEX_FIELDS.items()
    }


def from_index_document(hit: dict[str, Any]) -> DocumentIndex:
    """
    Map a search hit back onto a DocumentIndex DTO.

    Search metadata keys (``@search.score`` and friends) are ignored.
    """
    values = {
        attribute: hit.get(field_name)
        for attribute, field_name in INDEX_FIELDS.items()
        if hit.get(field_name) is not None
    }
    return DocumentIndex(**values)
