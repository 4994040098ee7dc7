"""
Azure AI Search store.

Thin async wrapper over the azure-search-documents SDK clients. Owns one
SearchClient (documents) and one SearchIndexClient (schema) for the
lifetime of the application; the SDK pools connections internally.

Dependencies: azure-search-documents, azure-core, tenacity
System role: Boundary adapter for the managed search service
"""

import logging
from dataclasses import dataclass, field
from typing import Any, AsyncIterator

from azure.core.credentials import AzureKeyCredential
from azure.core.exceptions import HttpResponseError, ServiceRequestError
from azure.search.documents.aio import SearchClient
from azure.search.documents.indexes.aio import SearchIndexClient
from tenacity import (
    retry,
    retry_if_exception,
    stop_after_attempt,
    wait_exponential_jitter,
)

from indexer.boundary.search.index_schema import KEY_FIELD, build_index_definition
from indexer.core.exceptions import SearchServiceError

logger = logging.getLogger(__name__)

# Maximum number of actions the service accepts in one indexing batch
MAX_BATCH_SIZE = 1000


@dataclass
class VendorSearchPage:
    """Raw result of a search call: total count plus hits as dicts."""

    total_count: int | None
    hits: list[dict[str, Any]] = field(default_factory=list)


def _is_transient(exc: BaseException) -> bool:
    """Connection failures, throttling and 5xx responses are worth retrying."""
    if isinstance(exc, ServiceRequestError):
        return True
    if isinstance(exc, HttpResponseError):
        return exc.status_code is not None and (exc.status_code == 429 or exc.status_code >= 500)
    return False


def _failed_keys(results: list[Any]) -> list[str]:
    return [result.key for result in results if not result.succeeded]


class AzureSearchStore:
    """
    Azure AI Search store for one index.

    Translates SDK errors into SearchServiceError so callers never see
    vendor exception types.
    """

    def __init__(self, endpoint: str, index_name: str, api_key: str) -> None:
        """
        Initialize SDK clients for the index.

        Args:
            endpoint: Search service endpoint (https://<service>.search.windows.net)
            index_name: Name of the index documents are stored in
            api_key: Admin API key
        """
        self._endpoint = endpoint
        self._index_name = index_name
        credential = AzureKeyCredential(api_key)
        self._search_client = SearchClient(
            endpoint=endpoint,
            index_name=index_name,
            credential=credential,
        )
        self._index_client = SearchIndexClient(endpoint=endpoint, credential=credential)

    @property
    def index_name(self) -> str:
        return self._index_name

    @retry(
        retry=retry_if_exception(_is_transient),
        stop=stop_after_attempt(5),
        wait=wait_exponential_jitter(initial=1, max=30, jitter=5),
        before_sleep=lambda retry_state: logger.warning(
            f"{__name__}:create_or_update_index - Retry {retry_state.attempt_number}/5 "
            "after transient failure"
        ),
        reraise=True,
    )
    async def _create_or_update_index_with_retry(self) -> None:
        await self._index_client.create_or_update_index(build_index_definition(self._index_name))

    async def create_or_update_index(self) -> None:
        """
        Create the index or update its schema in place.

        Raises:
            SearchServiceError: After retries are exhausted
        """
        try:
            await self._create_or_update_index_with_retry()
        except (HttpResponseError, ServiceRequestError) as e:
            logger.error(f"{__name__}:create_or_update_index - {type(e).__name__}: {e}")
            raise SearchServiceError(
                f"Failed to create or update index '{self._index_name}'",
                operation="create_index",
                status_code=getattr(e, "status_code", None),
            ) from e

        logger.info(
            "Search index created or updated",
            extra={"index_name": self._index_name},
        )

    async def merge_or_upload(self, documents: list[dict[str, Any]]) -> list[str]:
        """
        Merge or upload one batch of documents.

        Args:
            documents: Documents keyed by index field names

        Returns:
            list[str]: Keys of documents the service failed to index

        Raises:
            SearchServiceError: If the batch as a whole is rejected
        """
        if not documents:
            return []

        try:
            results = await self._search_client.merge_or_upload_documents(documents=documents)
        except (HttpResponseError, ServiceRequestError) as e:
            raise SearchServiceError(
                "Failed to index documents",
                operation="index",
                status_code=getattr(e, "status_code", None),
                details={"document_count": len(documents)},
            ) from e

        return _failed_keys(results)

    async def delete(self, keys: list[str]) -> list[str]:
        """
        Delete documents by key, in batches the service accepts.

        Args:
            keys: Document keys to delete

        Returns:
            list[str]: Keys the service failed to delete

        Raises:
            SearchServiceError: If a batch as a whole is rejected
        """
        failed: list[str] = []
        for start in range(0, len(keys), MAX_BATCH_SIZE):
            batch = [{KEY_FIELD: key} for key in keys[start:start + MAX_BATCH_SIZE]]
            try:
                results = await self._search_client.delete_documents(documents=batch)
            except (HttpResponseError, ServiceRequestError) as e:
                raise SearchServiceError(
                    "Failed to delete documents",
                    operation="delete",
                    status_code=getattr(e, "status_code", None),
                    details={"document_count": len(batch)},
                ) from e
            failed.extend(_failed_keys(results))
        return failed

    async def search(
        self,
        search_text: str,
        *,
        filter: str | None = None,
        skip: int | None = None,
        top: int | None = None,
    ) -> VendorSearchPage:
        """
        Run a full Lucene query matching all terms, with content highlights.

        Args:
            search_text: Query text ("*" matches everything)
            filter: Optional OData filter expression
            skip: Number of hits to skip
            top: Number of hits to return

        Returns:
            VendorSearchPage: Total count and hits

        Raises:
            SearchServiceError: If the query fails
        """
        try:
            results = await self._search_client.search(
                search_text=search_text,
                filter=filter,
                skip=skip,
                top=top,
                include_total_count=True,
                highlight_fields="content",
                query_type="full",
                search_mode="all",
            )
            pages = results.by_page()
            total_count = None
            hits = []
            async for page in pages:
                # The count comes with the first response of this iterator.
                if total_count is None:
                    total_count = await pages.get_count()
                hits.extend([dict(item) async for item in page])
                if top is None:
                    # Only the first page; the service applies its default page size.
                    break
        except (HttpResponseError, ServiceRequestError) as e:
            logger.error(f"{__name__}:search - {type(e).__name__}: {e}")
            raise SearchServiceError(
                "Search request failed",
                operation="search",
                status_code=getattr(e, "status_code", None),
            ) from e

        return VendorSearchPage(total_count=total_count, hits=hits)

    async def iter_keys(self, filter: str) -> AsyncIterator[str]:
        """
        Yield the key of every document matching a filter.

        Follows the service's pagination until all matches are returned.

        Args:
            filter: OData filter expression

        Raises:
            SearchServiceError: If the query fails
        """
        try:
            results = await self._search_client.search(
                search_text="*",
                filter=filter,
                select=[KEY_FIELD],
            )
            async for item in results:
                yield item[KEY_FIELD]
        except (HttpResponseError, ServiceRequestError) as e:
            raise SearchServiceError(
                "Failed to list documents",
                operation="search",
                status_code=getattr(e, "status_code", None),
                details={"filter": filter},
            ) from e

    async def close(self) -> None:
        """Close the underlying SDK clients."""
        await self._search_client.close()
        await self._index_client.close()
