"""Welcome and application info router composition."""

from fastapi import APIRouter, Header, status
from fastapi.responses import JSONResponse

from app.domain import AppMetadata, domain_format_timestamp, domain_utc_now
from app.metrics import SystemMetricsPort

UNKNOWN_REQUEST_ID = "unknown"


def api_create_info_router(metadata: AppMetadata, metrics_probe: SystemMetricsPort) -> APIRouter:
    """Create router exposing the welcome and descriptor endpoints.

    Args:
        metadata: Static application metadata echoed in payloads.
        metrics_probe: System metrics port used for runtime facts.

    Returns:
        APIRouter: Router exposing `/` and `/api/info` endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if metadata is None:
        raise ValueError("metadata must not be None")
    if metrics_probe is None:
        raise ValueError("metrics_probe must not be None")

    router = APIRouter(tags=["info"])

    @router.get("/")
    def api_welcome(x_request_id: str | None = Header(default=None)) -> JSONResponse:
        """Return welcome message and echo the caller's request id.

        Args:
            x_request_id: Optional `x-request-id` header value.

        Returns:
            JSONResponse: Welcome payload.
        """

        payload = {
            "message": f"Welcome to Multi-Cloud Application running on {metadata.cloud_provider}!",
            "timestamp": domain_format_timestamp(),
            "cloud_provider": metadata.cloud_provider,
            "environment": metadata.environment_name,
            "version": metadata.version,
            "request_id": x_request_id or UNKNOWN_REQUEST_ID,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/api/info")
    def api_application_info() -> JSONResponse:
        """Return static and runtime descriptor for this instance.

        Returns:
            JSONResponse: Descriptor payload.
        """

        snapshot = metrics_probe.metrics_snapshot(now=domain_utc_now())
        payload = {
            "application": metadata.application_name,
            "version": metadata.version,
            "cloud_provider": metadata.cloud_provider,
            "environment": metadata.environment_name,
            "python_version": snapshot.python_version,
            "platform": snapshot.platform,
            "architecture": snapshot.architecture,
            "pid": snapshot.pid,
            "uptime": snapshot.uptime_seconds,
            "timestamp": domain_format_timestamp(snapshot.sampled_at),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router
