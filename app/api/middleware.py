"""HTTP middleware for security headers and access logging."""

from __future__ import annotations

import logging
import time
from datetime import datetime, timezone

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

access_logger = logging.getLogger("app.access")

SECURITY_HEADERS: dict[str, str] = {
    "Content-Security-Policy": (
        "default-src 'self';base-uri 'self';font-src 'self' https: data:;form-action 'self';"
        "frame-ancestors 'self';img-src 'self' data:;object-src 'none';script-src 'self';"
        "script-src-attr 'none';style-src 'self' https: 'unsafe-inline';upgrade-insecure-requests"
    ),
    "Cross-Origin-Opener-Policy": "same-origin",
    "Cross-Origin-Resource-Policy": "same-origin",
    "Origin-Agent-Cluster": "?1",
    "Referrer-Policy": "no-referrer",
    "Strict-Transport-Security": "max-age=31536000; includeSubDomains",
    "X-Content-Type-Options": "nosniff",
    "X-DNS-Prefetch-Control": "off",
    "X-Download-Options": "noopen",
    "X-Frame-Options": "SAMEORIGIN",
    "X-Permitted-Cross-Domain-Policies": "none",
    "X-XSS-Protection": "0",
}


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """Attach common hardening headers to every response.

    Headers already set by a handler are left untouched.
    """

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        response = await call_next(request)
        for header_name, header_value in SECURITY_HEADERS.items():
            if header_name not in response.headers:
                response.headers[header_name] = header_value
        return response


class AccessLogMiddleware(BaseHTTPMiddleware):
    """Log every request in combined log format with response time."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started_at = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            access_logger.info(api_format_access_line(request, 500, None, started_at))
            raise
        access_logger.info(
            api_format_access_line(request, response.status_code, response.headers.get("content-length"), started_at)
        )
        return response


def api_format_access_line(
    request: Request,
    status_code: int,
    content_length: str | None,
    started_at: float,
) -> str:
    """Render one combined-log-format access line.

    Args:
        request: Served request.
        status_code: Response status code.
        content_length: Response body size header, if known.
        started_at: `time.perf_counter()` reading taken when the request arrived.

    Returns:
        str: Access log line.
    """

    client_host = request.client.host if request.client else "-"
    target = request.url.path
    if request.url.query:
        target = f"{target}?{request.url.query}"
    http_version = request.scope.get("http_version", "1.1")
    logged_at = datetime.now(timezone.utc).strftime("%d/%b/%Y:%H:%M:%S %z")
    duration_ms = (time.perf_counter() - started_at) * 1000.0
    referrer = request.headers.get("referer", "-")
    user_agent = request.headers.get("user-agent", "-")
    return (
        f'{client_host} - - [{logged_at}] "{request.method} {target} HTTP/{http_version}" '
        f'{status_code} {content_length or "-"} "{referrer}" "{user_agent}" {duration_ms:.3f} ms'
    )
