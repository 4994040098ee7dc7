"""
FastAPI application entry point.

Initializes FastAPI app, registers routers, adds middleware, exception
handlers and configures lifespan.

Dependencies: fastapi, indexer.api, indexer.observability, indexer.configs
System role: Application initialization and configuration
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from indexer import __version__
from indexer.api import api_router
from indexer.api.deps import get_search_service, get_service_cache
from indexer.api.versioning import ApiVersionMiddleware
from indexer.configs import get_settings
from indexer.core.exceptions import (
    IndexerException,
    SearchNotConfiguredError,
    SearchServiceError,
)
from indexer.models import ErrorResponse
from indexer.observability.logger import configure_logging
from indexer.observability.middleware import (
    CorrelationMiddleware,
    RequestLoggingMiddleware,
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Application lifespan context manager.

    Handles startup and shutdown events.
    Creates or updates the search index schema when an API key is configured.
    """
    # Startup
    settings = get_settings()
    configure_logging(settings.log_level)
    logger.info(
        "Application startup: logging configured",
        extra={"environment": settings.environment, "log_level": settings.log_level},
    )

    search_service = get_search_service()
    if settings.azure_search.api_key.strip() and search_service.is_enabled:
        try:
            await search_service.create_or_update_index()
        except Exception as e:
            logger.exception(
                "Failed to create or update search index",
                extra={"index_name": settings.azure_search.index_name, "error": str(e)},
            )
            raise
    else:
        logger.warning("Search service not configured: uploads and deletes are skipped")

    logger.info("Application startup complete")

    yield

    # Shutdown
    await get_service_cache().aclose()
    logger.info("Application shutdown")


def _error_response(status_code: int, exc: IndexerException) -> JSONResponse:
    body = ErrorResponse(error=exc.message, details=exc.details or None)
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def search_not_configured_handler(request: Request, exc: SearchNotConfiguredError) -> JSONResponse:
    logger.warning("Search requested but search service not configured", extra={"path": request.url.path})
    return _error_response(status.HTTP_503_SERVICE_UNAVAILABLE, exc)


async def search_service_error_handler(request: Request, exc: SearchServiceError) -> JSONResponse:
    logger.error(
        "Search service call failed",
        extra={"path": request.url.path, "operation": exc.operation, "status_code": exc.status_code},
    )
    return _error_response(status.HTTP_502_BAD_GATEWAY, exc)


async def indexer_exception_handler(request: Request, exc: IndexerException) -> JSONResponse:
    logger.error("Unhandled application error", extra={"path": request.url.path, "error": str(exc)})
    return _error_response(status.HTTP_500_INTERNAL_SERVER_ERROR, exc)


def create_app() -> FastAPI:
    """
    Create and configure FastAPI application.

    API docs are not served in the production environment.

    Returns:
        FastAPI: Configured application instance
    """
    settings = get_settings()
    docs_enabled = not settings.is_production

    app = FastAPI(
        title="Indexer AzureSearch API",
        description="Microservice for the Azure search feature of project documentation.",
        version=__version__,
        lifespan=lifespan,
        docs_url="/docs" if docs_enabled else None,
        redoc_url="/redoc" if docs_enabled else None,
        openapi_url="/openapi.json" if docs_enabled else None,
    )

    # Added first = last to execute
    app.add_middleware(ApiVersionMiddleware)
    app.add_middleware(RequestLoggingMiddleware)
    app.add_middleware(CorrelationMiddleware)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=False,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.add_exception_handler(SearchNotConfiguredError, search_not_configured_handler)
    app.add_exception_handler(SearchServiceError, search_service_error_handler)
    app.add_exception_handler(IndexerException, indexer_exception_handler)

    app.include_router(api_router)

    return app


app = create_app()


def run() -> None:
    """Serve the application with uvicorn."""
    import uvicorn

    settings = get_settings()
    uvicorn.run(
        "indexer.main:app",
        host=settings.server.host,
        port=settings.server.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    run()
