"""Health and metrics endpoint router composition."""

import logging

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

from app.domain import AppMetadata, SystemSnapshot, domain_format_timestamp, domain_utc_now
from app.metrics import SystemMetricsPort

logger = logging.getLogger(__name__)


def api_create_health_router(metadata: AppMetadata, metrics_probe: SystemMetricsPort) -> APIRouter:
    """Create router exposing liveness and monitoring snapshots.

    Args:
        metadata: Static application metadata echoed in payloads.
        metrics_probe: System metrics port sampled on every request.

    Returns:
        APIRouter: Router exposing `/health` and `/metrics` endpoints.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if metadata is None:
        raise ValueError("metadata must not be None")
    if metrics_probe is None:
        raise ValueError("metrics_probe must not be None")

    router = APIRouter(tags=["health"])

    @router.get("/health")
    def api_health_status() -> JSONResponse:
        """Return liveness state with process resource counters.

        The service never reports itself unhealthy; a response at all means
        the process is serving. When counters cannot be sampled they are
        reported as `null`.

        Returns:
            JSONResponse: Health payload, always HTTP 200.
        """

        sampled_at = domain_utc_now()
        memory_usage: dict[str, int] | None = None
        cpu_usage: dict[str, int] | None = None
        try:
            snapshot = metrics_probe.metrics_snapshot(now=sampled_at)
            memory_usage = snapshot.memory_usage.as_payload()
            cpu_usage = snapshot.cpu_usage.as_payload()
        except RuntimeError as error:
            logger.warning("Health counters unavailable: %s", error)

        payload = {
            "status": "healthy",
            "timestamp": domain_format_timestamp(sampled_at),
            "uptime": metrics_probe.metrics_uptime_seconds(),
            "cloud_provider": metadata.cloud_provider,
            "environment": metadata.environment_name,
            "version": metadata.version,
            "memory_usage": memory_usage,
            "cpu_usage": cpu_usage,
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    @router.get("/metrics")
    def api_metrics_snapshot() -> JSONResponse:
        """Return the full process and host metrics snapshot.

        Returns:
            JSONResponse: Metrics payload for monitoring scrapers.
        """

        snapshot = metrics_probe.metrics_snapshot(now=domain_utc_now())
        payload = api_serialize_metrics_snapshot(snapshot)
        payload["cloud_provider"] = metadata.cloud_provider
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


def api_serialize_metrics_snapshot(snapshot: SystemSnapshot) -> dict[str, object]:
    """Serialize one metrics snapshot to JSON payload.

    Args:
        snapshot: Sampled process and host metrics.

    Returns:
        dict[str, object]: JSON-serializable metrics payload.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    return {
        "memory_usage": snapshot.memory_usage.as_payload(),
        "cpu_usage": snapshot.cpu_usage.as_payload(),
        "uptime": snapshot.uptime_seconds,
        "load_average": list(snapshot.load_average),
        "total_memory": snapshot.total_memory,
        "free_memory": snapshot.free_memory,
        "platform": snapshot.platform,
        "python_version": snapshot.python_version,
        "timestamp": domain_format_timestamp(snapshot.sampled_at),
    }
