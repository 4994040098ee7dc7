"""
Health check API endpoints.

Routes: GET /health, GET /health/search

Dependencies: indexer.api.deps
System role: Health check HTTP API
"""

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from indexer.api.deps import get_search_service
from indexer.application.services import SearchService


class HealthResponse(BaseModel):
    """Health check response model."""

    status: str
    message: str


router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthResponse)
async def health_check() -> HealthResponse:
    """Basic health check."""
    return HealthResponse(status="healthy", message="Server Healthy")


@router.get("/search", response_model=HealthResponse)
async def health_check_search(
    search_service: SearchService = Depends(get_search_service),
) -> HealthResponse:
    """Report whether a search service is configured."""
    if search_service.is_enabled:
        return HealthResponse(
            status="healthy",
            message=f"Search index '{search_service.settings.index_name}' configured",
        )
    return HealthResponse(status="degraded", message="Search service not configured")
