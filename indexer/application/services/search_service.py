"""
Search service orchestrator.

Maps HTTP DTOs onto search store calls and store results back onto DTOs.
Builds branch filters, paging parameters and timing for search requests.
Upload and delete are silently skipped when no search service is configured.

Dependencies: indexer.boundary.search, indexer.models
System role: Document indexing and search orchestration
"""

import logging
import time

from indexer.boundary.search import AzureSearchStore, from_index_document, to_index_document
from indexer.configs.azure_search import AzureSearchSettings
from indexer.core.exceptions import SearchNotConfiguredError
from indexer.models import DocumentIndex, DocumentSearchResult, SearchFilter, SearchResult

logger = logging.getLogger(__name__)


def _quote(value: str) -> str:
    """Quote a string literal for an OData filter."""
    return "'" + value.replace("'", "''") + "'"


def build_branch_filter(project_id: str | None, branch_name: str | None) -> str | None:
    """
    Build the OData filter restricting results to one project branch.

    Args:
        project_id: Project identifier
        branch_name: Branch name

    Returns:
        str | None: Filter expression, or None unless both values are given
    """
    if not project_id or not project_id.strip() or not branch_name or not branch_name.strip():
        return None
    return f"projectId eq {_quote(project_id)} and branchName eq {_quote(branch_name)}"


def strip_branch_prefix(branch_name: str | None, url: str | None) -> str | None:
    """
    Remove the leading "<branch>/" segment from a document url.

    Urls that do not start with the branch segment are returned unchanged.
    """
    if url is None or not branch_name:
        return url
    prefix = f"{branch_name}/"
    if url.startswith(prefix):
        return url[len(prefix):]
    return url


class SearchService:
    """
    Search service orchestrator.

    Wraps AzureSearchStore with DTO mapping for the HTTP layer.
    """

    def __init__(
        self,
        store: AzureSearchStore | None,
        settings: AzureSearchSettings,
    ) -> None:
        """
        Initialize search service.

        Args:
            store: Search store, None when the search service is not configured
            settings: Search service settings
        """
        self.store = store
        self.settings = settings

    @property
    def is_enabled(self) -> bool:
        """True when a store exists and service name and API key are set."""
        return self.store is not None and self.settings.is_configured

    async def create_or_update_index(self) -> None:
        """Create the index or update its schema."""
        if self.store is None:
            raise SearchNotConfiguredError()
        await self.store.create_or_update_index()

    async def upload_documents(
        self,
        project_id: str,
        branch_name: str,
        documents: list[DocumentIndex],
    ) -> None:
        """
        Merge or upload a batch of documents of one project branch.

        Documents without their own project id or branch name take the
        values from the request path. Documents the service fails to index
        are logged and skipped.

        Args:
            project_id: Project identifier from the request path
            branch_name: Branch name from the request path
            documents: Documents to index
        """
        if not self.is_enabled or not documents:
            return

        batch = []
        for document in documents:
            values = to_index_document(document)
            if not values["projectId"]:
                values["projectId"] = project_id
            if not values["branchName"]:
                values["branchName"] = branch_name
            batch.append(values)

        failed_keys = await self.store.merge_or_upload(batch)
        if failed_keys:
            logger.error(
                f"Failed to index some of the documents: {', '.join(failed_keys)}",
                extra={"project_id": project_id, "branch_name": branch_name},
            )

        logger.info(
            "Indexed documents",
            extra={
                "project_id": project_id,
                "branch_name": branch_name,
                "document_count": len(batch) - len(failed_keys),
            },
        )

    async def delete_documents(self, project_id: str, branch_name: str) -> None:
        """
        Delete every indexed document of one project branch.

        Args:
            project_id: Project identifier
            branch_name: Branch name
        """
        if not self.is_enabled:
            return

        branch_filter = build_branch_filter(project_id, branch_name)
        if branch_filter is None:
            return

        keys = [key async for key in self.store.iter_keys(branch_filter)]
        if not keys:
            return

        failed_keys = await self.store.delete(keys)
        if failed_keys:
            logger.error(
                f"Failed to delete some of the documents: {', '.join(failed_keys)}",
                extra={"project_id": project_id, "branch_name": branch_name},
            )

        logger.info(
            "Deleted branch documents",
            extra={
                "project_id": project_id,
                "branch_name": branch_name,
                "document_count": len(keys) - len(failed_keys),
            },
        )

    async def search(
        self,
        search_filter: SearchFilter,
        project_id: str | None = None,
        branch_name: str | None = None,
    ) -> DocumentSearchResult:
        """
        Search the index, optionally restricted to one project branch.

        Args:
            search_filter: Query text and paging
            project_id: Optional project identifier
            branch_name: Optional branch name

        Returns:
            DocumentSearchResult: Hits with scores and highlights

        Raises:
            SearchNotConfiguredError: If no search service is configured
            SearchServiceError: If the query fails
        """
        if not self.is_enabled:
            raise SearchNotConfiguredError()

        skip = None
        top = None
        if search_filter.limit > 0:
            skip = search_filter.page * search_filter.limit
            top = search_filter.limit

        start_time = time.perf_counter()
        page = await self.store.search(
            search_filter.query or "*",
            filter=build_branch_filter(project_id, branch_name),
            skip=skip,
            top=top,
        )
        elapsed_ms = int((time.perf_counter() - start_time) * 1000)

        results = []
        for hit in page.hits:
            document = from_index_document(hit)
            document.file_uri = strip_branch_prefix(document.branch_name, document.url)
            results.append(
                SearchResult(
                    score=hit.get("@search.score") or 0.0,
                    highlights=hit.get("@search.highlights") or {},
                    document=document,
                )
            )

        return DocumentSearchResult(
            results=results,
            number_of_results=page.total_count or 0,
            elapsed_milliseconds=elapsed_ms,
        )
