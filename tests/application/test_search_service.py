"""
Test suite for SearchService.

Tests branch filters, url mapping, upload, deletion and search.
Uses a mocked AzureSearchStore.

System role: Verification of search service orchestration layer
"""

import logging
from unittest.mock import MagicMock

import pytest

from indexer.application.services.search_service import (
    SearchService,
    build_branch_filter,
    strip_branch_prefix,
)
from indexer.boundary.search import VendorSearchPage
from indexer.core.exceptions import SearchNotConfiguredError
from indexer.models import SearchFilter


@pytest.fixture
def search_service(mock_store, search_settings) -> SearchService:
    """Provide SearchService with mocked store."""
    return SearchService(store=mock_store, settings=search_settings)


class TestBuildBranchFilter:
    """Test suite for build_branch_filter."""

    def test_should_filter_on_project_and_branch(self) -> None:
        assert (
            build_branch_filter("project-a", "master")
            == "projectId eq 'project-a' and branchName eq 'master'"
        )

    def test_should_escape_single_quotes(self) -> None:
        assert (
            build_branch_filter("o'neil", "it's")
            == "projectId eq 'o''neil' and branchName eq 'it''s'"
        )

    @pytest.mark.parametrize(
        "project_id, branch_name",
        [(None, "master"), ("project-a", None), ("  ", "master"), ("project-a", "")],
    )
    def test_should_return_none_unless_both_given(self, project_id, branch_name) -> None:
        assert build_branch_filter(project_id, branch_name) is None


class TestStripBranchPrefix:
    """Test suite for strip_branch_prefix."""

    def test_should_remove_branch_segment(self) -> None:
        assert strip_branch_prefix("master", "master/docs/index.md") == "docs/index.md"

    def test_should_keep_url_without_branch_segment(self) -> None:
        assert strip_branch_prefix("develop", "master/docs/index.md") == "master/docs/index.md"

    def test_should_handle_missing_values(self) -> None:
        assert strip_branch_prefix("master", None) is None
        assert strip_branch_prefix(None, "docs/index.md") == "docs/index.md"


class TestIsEnabled:
    """Test suite for SearchService.is_enabled."""

    def test_enabled_with_store_and_credentials(self, search_service) -> None:
        assert search_service.is_enabled is True

    def test_disabled_without_store(self, search_settings) -> None:
        assert SearchService(store=None, settings=search_settings).is_enabled is False

    def test_disabled_without_credentials(self, mock_store, unconfigured_search_settings) -> None:
        service = SearchService(store=mock_store, settings=unconfigured_search_settings)
        assert service.is_enabled is False


class TestUploadDocuments:
    """Test suite for SearchService.upload_documents."""

    @pytest.mark.asyncio
    async def test_should_merge_or_upload_mapped_documents(
        self, search_service, mock_store, sample_documents
    ) -> None:
        await search_service.upload_documents("project-a", "master", sample_documents)

        mock_store.merge_or_upload.assert_awaited_once()
        batch = mock_store.merge_or_upload.await_args.args[0]
        assert batch[0] == {
            "id": "doc-1",
            "url": "master/docs/index.md",
            "title": "Index",
            "projectId": "project-a",
            "projectName": "Project A",
            "branchName": "master",
            "content": "Welcome to the documentation",
            "tags": ["intro"],
        }

    @pytest.mark.asyncio
    async def test_should_fill_missing_project_and_branch_from_path(
        self, search_service, mock_store, sample_documents
    ) -> None:
        await search_service.upload_documents("project-b", "develop", sample_documents)

        batch = mock_store.merge_or_upload.await_args.args[0]
        assert batch[0]["projectId"] == "project-a"
        assert batch[0]["branchName"] == "master"
        assert batch[1]["projectId"] == "project-b"
        assert batch[1]["branchName"] == "develop"

    @pytest.mark.asyncio
    async def test_should_skip_when_disabled(
        self, mock_store, unconfigured_search_settings, sample_documents
    ) -> None:
        service = SearchService(store=mock_store, settings=unconfigured_search_settings)

        await service.upload_documents("project-a", "master", sample_documents)

        mock_store.merge_or_upload.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_should_skip_empty_batch(self, search_service, mock_store) -> None:
        await search_service.upload_documents("project-a", "master", [])

        mock_store.merge_or_upload.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_should_log_failed_keys_without_raising(
        self, search_service, mock_store, sample_documents, caplog
    ) -> None:
        mock_store.merge_or_upload.return_value = ["doc-2"]

        with caplog.at_level(logging.ERROR):
            await search_service.upload_documents("project-a", "master", sample_documents)

        assert "Failed to index some of the documents: doc-2" in caplog.text


class TestDeleteDocuments:
    """Test suite for SearchService.delete_documents."""

    @pytest.mark.asyncio
    async def test_should_delete_all_branch_documents(
        self, search_service, mock_store, make_async_iter
    ) -> None:
        mock_store.iter_keys = MagicMock(return_value=make_async_iter(["doc-1", "doc-2"]))

        await search_service.delete_documents("project-a", "master")

        mock_store.iter_keys.assert_called_once_with(
            "projectId eq 'project-a' and branchName eq 'master'"
        )
        mock_store.delete.assert_awaited_once_with(["doc-1", "doc-2"])

    @pytest.mark.asyncio
    async def test_should_not_delete_when_nothing_matches(
        self, search_service, mock_store, make_async_iter
    ) -> None:
        mock_store.iter_keys = MagicMock(return_value=make_async_iter([]))

        await search_service.delete_documents("project-a", "master")

        mock_store.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_should_skip_when_disabled(self, mock_store, unconfigured_search_settings) -> None:
        mock_store.iter_keys = MagicMock()
        service = SearchService(store=mock_store, settings=unconfigured_search_settings)

        await service.delete_documents("project-a", "master")

        mock_store.iter_keys.assert_not_called()
        mock_store.delete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_should_log_failed_keys_without_raising(
        self, search_service, mock_store, make_async_iter, caplog
    ) -> None:
        mock_store.iter_keys = MagicMock(return_value=make_async_iter(["doc-1", "doc-2"]))
        mock_store.delete.return_value = ["doc-1"]

        with caplog.at_level(logging.ERROR):
            await search_service.delete_documents("project-a", "master")

        assert "Failed to delete some of the documents: doc-1" in caplog.text


class TestSearch:
    """Test suite for SearchService.search."""

    @pytest.mark.asyncio
    async def test_should_page_when_limit_given(self, search_service, mock_store) -> None:
        mock_store.search.return_value = VendorSearchPage(total_count=0, hits=[])

        await search_service.search(SearchFilter(query="install", page=2, limit=10))

        mock_store.search.assert_awaited_once_with("install", filter=None, skip=20, top=10)

    @pytest.mark.asyncio
    async def test_should_not_page_without_limit(self, search_service, mock_store) -> None:
        mock_store.search.return_value = VendorSearchPage(total_count=0, hits=[])

        await search_service.search(SearchFilter(query="install", page=3, limit=0))

        mock_store.search.assert_awaited_once_with("install", filter=None, skip=None, top=None)

    @pytest.mark.asyncio
    async def test_should_scope_to_branch(self, search_service, mock_store) -> None:
        mock_store.search.return_value = VendorSearchPage(total_count=0, hits=[])

        await search_service.search(SearchFilter(), "project-a", "master")

        mock_store.search.assert_awaited_once_with(
            "*",
            filter="projectId eq 'project-a' and branchName eq 'master'",
            skip=None,
            top=None,
        )

    @pytest.mark.asyncio
    async def test_should_map_hits(self, search_service, mock_store) -> None:
        mock_store.search.return_value = VendorSearchPage(
            total_count=42,
            hits=[
                {
                    "@search.score": 1.5,
                    "@search.highlights": {"content": ["Run the <em>installer</em>"]},
                    "id": "doc-2",
                    "url": "master/docs/install.md",
                    "title": "Install",
                    "projectId": "project-a",
                    "projectName": "Project A",
                    "branchName": "master",
                    "tags": ["setup"],
                }
            ],
        )

        result = await search_service.search(SearchFilter(query="installer"))

        assert result.number_of_results == 42
        assert result.elapsed_milliseconds >= 0
        assert len(result.results) == 1
        hit = result.results[0]
        assert hit.score == 1.5
        assert hit.highlights == {"content": ["Run the <em>installer</em>"]}
        assert hit.document.id == "doc-2"
        assert hit.document.project_name == "Project A"
        assert hit.document.tags == ["setup"]
        assert hit.document.content is None
        assert hit.document.file_uri == "docs/install.md"

    @pytest.mark.asyncio
    async def test_should_default_missing_count_and_highlights(
        self, search_service, mock_store
    ) -> None:
        mock_store.search.return_value = VendorSearchPage(
            total_count=None,
            hits=[{"@search.score": 0.3, "@search.highlights": None, "id": "doc-1"}],
        )

        result = await search_service.search(SearchFilter())

        assert result.number_of_results == 0
        assert result.results[0].highlights == {}
        assert result.results[0].document.file_uri is None

    @pytest.mark.asyncio
    async def test_should_raise_when_disabled(self, search_settings) -> None:
        service = SearchService(store=None, settings=search_settings)

        with pytest.raises(SearchNotConfiguredError):
            await service.search(SearchFilter())
