"""
Document domain models and schemas.

Document DTO uploaded by clients and returned inside search results.

Dependencies: pydantic
System role: Document API contracts
"""

from pydantic import Field, field_validator

from indexer.models.common import CamelModel


class DocumentIndex(CamelModel):
    """A single document of a project branch, as stored in the search index."""

    id: str = Field(min_length=1, description="Unique document key")
    url: str | None = Field(default=None, description="Document path prefixed with the branch name")
    title: str | None = None
    project_id: str | None = None
    project_name: str | None = None
    branch_name: str | None = None
    content: str | None = Field(default=None, description="Searchable text, never returned by search")
    tags: list[str] | None = Field(default_factory=list)
    file_uri: str | None = Field(
        default=None,
        description="Document path relative to the branch (search results only)",
    )

    @field_validator("tags", mode="before")
    @classmethod
    def null_tags_to_empty(cls, value):
        """Clients serialize an absent tag array as null."""
        return [] if value is None else value
