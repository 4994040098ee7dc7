"""
Search API endpoints.

Routes:
    GET    /api/search
    GET    /api/search/projects/{project_id}/branches/{branch_name}
    POST   /api/search/projects/{project_id}/branches/{branch_name}
    DELETE /api/search/projects/{project_id}/branches/{branch_name}

Dependencies: indexer.application.services, indexer.api.auth, indexer.models
System role: Document indexing and search HTTP API
"""

from fastapi import APIRouter, Body, Depends, Query, Response, status

from indexer.api.auth import require_authorization
from indexer.api.deps import get_search_service
from indexer.application.services import SearchService
from indexer.models import DocumentIndex, DocumentSearchResult, SearchFilter

router = APIRouter(
    prefix="/api/search",
    tags=["search"],
    dependencies=[Depends(require_authorization)],
)


def get_search_filter(
    query: str = Query(default="*", description="Full Lucene query text"),
    page: int = Query(default=0, ge=0, description="Zero-based page number"),
    limit: int = Query(default=0, ge=0, description="Page size, 0 for the service default"),
) -> SearchFilter:
    """Bind the search filter from the query string."""
    return SearchFilter(query=query, page=page, limit=limit)


@router.get("", response_model=DocumentSearchResult)
async def search_documents(
    search_filter: SearchFilter = Depends(get_search_filter),
    search_service: SearchService = Depends(get_search_service),
) -> DocumentSearchResult:
    """
    Search documents across all projects and branches.

    Args:
        search_filter: Query text and paging from the query string
        search_service: Injected SearchService

    Returns:
        DocumentSearchResult: Hits with scores, highlights and total count

    Raises:
        HTTPException(503): Search service not configured
        HTTPException(502): Search service call failed
    """
    return await search_service.search(search_filter)


@router.get(
    "/projects/{project_id}/branches/{branch_name}",
    response_model=DocumentSearchResult,
)
async def search_branch_documents(
    project_id: str,
    branch_name: str,
    search_filter: SearchFilter = Depends(get_search_filter),
    search_service: SearchService = Depends(get_search_service),
) -> DocumentSearchResult:
    """
    Search documents of one project branch.

    Args:
        project_id: Project identifier
        branch_name: Branch name
        search_filter: Query text and paging from the query string
        search_service: Injected SearchService

    Returns:
        DocumentSearchResult: Hits with scores, highlights and total count
    """
    return await search_service.search(search_filter, project_id, branch_name)


@router.post("/projects/{project_id}/branches/{branch_name}")
async def upload_documents(
    project_id: str,
    branch_name: str,
    documents: list[DocumentIndex] = Body(...),
    search_service: SearchService = Depends(get_search_service),
) -> Response:
    """
    Merge or upload a batch of documents of one project branch.

    Documents the search service fails to index are logged, not reported.

    Args:
        project_id: Project identifier
        branch_name: Branch name
        documents: Documents to index
        search_service: Injected SearchService

    Returns:
        Response: 200 with an empty body
    """
    await search_service.upload_documents(project_id, branch_name, documents)
    return Response(status_code=status.HTTP_200_OK)


@router.delete("/projects/{project_id}/branches/{branch_name}")
async def delete_documents(
    project_id: str,
    branch_name: str,
    search_service: SearchService = Depends(get_search_service),
) -> Response:
    """
    Delete all documents of one project branch.

    Args:
        project_id: Project identifier
        branch_name: Branch name
        search_service: Injected SearchService

    Returns:
        Response: 200 with an empty body
    """
    await search_service.delete_documents(project_id, branch_name)
    return Response(status_code=status.HTTP_200_OK)
