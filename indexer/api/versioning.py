"""
API version negotiation.

Clients may pass ``api-version`` as a query parameter or header; requests
without one are served as the default version. Every response reports the
supported versions.

Dependencies: fastapi, starlette
System role: API versioning middleware
"""

import logging

from fastapi import Request, status
from fastapi.responses import JSONResponse
from starlette.middleware.base import BaseHTTPMiddleware

logger = logging.getLogger(__name__)

API_VERSION_PARAM = "api-version"
SUPPORTED_HEADER = "api-supported-versions"
DEFAULT_API_VERSION = "1.0"
SUPPORTED_API_VERSIONS = ("1.0",)


def normalize_version(raw: str) -> str:
    """Normalize "1" to "1.0"."""
    raw = raw.strip()
    if raw.isdigit():
        return f"{raw}.0"
    return raw


class ApiVersionMiddleware(BaseHTTPMiddleware):
    """Rejects unsupported API versions and reports supported ones."""

    async def dispatch(self, request: Request, call_next):
        requested = request.query_params.get(API_VERSION_PARAM) or request.headers.get(API_VERSION_PARAM)
        version = normalize_version(requested) if requested else DEFAULT_API_VERSION

        if version not in SUPPORTED_API_VERSIONS:
            logger.warning(
                "Unsupported API version requested",
                extra={"api_version": requested, "path": request.url.path},
            )
            response = JSONResponse(
                status_code=status.HTTP_400_BAD_REQUEST,
                content={
                    "detail": f"The HTTP resource does not support the API version '{requested}'."
                },
            )
        else:
            request.state.api_version = version
            response = await call_next(request)

        response.headers[SUPPORTED_HEADER] = ", ".join(SUPPORTED_API_VERSIONS)
        return response
