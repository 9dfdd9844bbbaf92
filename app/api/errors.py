"""Exception handling that converts faults into the JSON error envelope."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from app.domain import AppMetadata, domain_format_timestamp

logger = logging.getLogger(__name__)

NOT_FOUND_ERROR = "Endpoint not found"
INTERNAL_ERROR = "Internal Server Error"

# Method mismatches on a known path are reported as unknown routes.
NOT_FOUND_STATUS_CODES = frozenset({status.HTTP_404_NOT_FOUND, status.HTTP_405_METHOD_NOT_ALLOWED})


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Convert unexpected handler faults into the generic 500 envelope.

    Installed inside Starlette's `ServerErrorMiddleware`, so the fault is
    logged once here and never re-raised to the server.
    """

    def __init__(self, app: ASGIApp, metadata: AppMetadata):
        super().__init__(app)
        self._metadata = metadata

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        try:
            return await call_next(request)
        except Exception:  # pylint: disable=broad-exception-caught
            logger.exception("Unhandled error while serving %s %s", request.method, request.url.path)
            payload = {
                "error": INTERNAL_ERROR,
                "cloud_provider": self._metadata.cloud_provider,
                "timestamp": domain_format_timestamp(),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)


def api_register_exception_handlers(application: FastAPI, metadata: AppMetadata) -> None:
    """Install not-found and HTTP exception handlers plus the catch-all middleware.

    Must run before any other middleware is added so the catch-all sits
    innermost and its 500 responses still pass through header, CORS and
    access-log middleware.

    Args:
        application: Application receiving the handlers.
        metadata: Static application metadata echoed in error payloads.

    Returns:
        None: Handlers are registered on the application.

    Raises:
        ValueError: Raised when metadata is missing.
    """

    if metadata is None:
        raise ValueError("metadata must not be None")

    async def api_handle_http_exception(request: Request, error: StarletteHTTPException) -> JSONResponse:
        if error.status_code in NOT_FOUND_STATUS_CODES:
            payload = {
                "error": NOT_FOUND_ERROR,
                "path": api_requested_path(request),
                "cloud_provider": metadata.cloud_provider,
                "timestamp": domain_format_timestamp(),
            }
            return JSONResponse(content=payload, status_code=status.HTTP_404_NOT_FOUND)

        payload = {
            "error": str(error.detail),
            "cloud_provider": metadata.cloud_provider,
            "timestamp": domain_format_timestamp(),
        }
        return JSONResponse(content=payload, status_code=error.status_code, headers=error.headers)

    application.add_exception_handler(StarletteHTTPException, api_handle_http_exception)
    application.add_middleware(UnhandledErrorMiddleware, metadata=metadata)


def api_requested_path(request: Request) -> str:
    """Return the requested path including its query string."""

    if request.url.query:
        return f"{request.url.path}?{request.url.query}"
    return request.url.path
