"""Synthetic load router composition."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse
from starlette.concurrency import run_in_threadpool

from app.config import AppSettings
from app.domain import AppMetadata, domain_format_timestamp
from app.load import load_parse_duration_ms, load_run_blocking_cpu_delay

logger = logging.getLogger(__name__)

FORM_CONTENT_TYPES = ("application/x-www-form-urlencoded", "multipart/form-data")


def api_create_load_router(settings: AppSettings, metadata: AppMetadata) -> APIRouter:
    """Create router exposing the synthetic CPU load endpoint.

    Args:
        settings: Runtime settings controlling offload and duration bounds.
        metadata: Static application metadata echoed in payloads.

    Returns:
        APIRouter: Router exposing `/api/load`.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if settings is None:
        raise ValueError("settings must not be None")
    if metadata is None:
        raise ValueError("metadata must not be None")

    router = APIRouter(prefix="/api", tags=["load"])

    @router.post("/load")
    async def api_load_simulate(request: Request) -> JSONResponse:
        """Burn CPU for the requested duration, then report elapsed time.

        Unless offload is enabled the busy-wait runs on the event loop and
        stalls every concurrent request until it completes.

        Args:
            request: Incoming request with optional JSON or form `duration`.

        Returns:
            JSONResponse: Load completion payload.
        """

        raw_duration = await api_read_body_field(request, "duration")
        duration_ms = load_parse_duration_ms(raw_duration, max_duration_ms=settings.load_max_duration_ms)

        if settings.load_offload_enabled:
            elapsed_ms = await run_in_threadpool(load_run_blocking_cpu_delay, duration_ms)
        else:
            logger.warning("Synthetic load of %d ms is blocking the event loop", duration_ms)
            elapsed_ms = load_run_blocking_cpu_delay(duration_ms)

        payload = {
            "message": f"Load simulation completed in {elapsed_ms}ms",
            "elapsed_ms": elapsed_ms,
            "requested_duration_ms": duration_ms,
            "cloud_provider": metadata.cloud_provider,
            "timestamp": domain_format_timestamp(),
        }
        return JSONResponse(content=payload, status_code=status.HTTP_200_OK)

    return router


async def api_read_body_field(request: Request, field_name: str) -> Any:
    """Read one field from a JSON or URL-encoded request body.

    Args:
        request: Incoming request.
        field_name: Top-level field to extract.

    Returns:
        Any: Field value, or `None` when the body is absent, malformed or lacks the field.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    content_type = request.headers.get("content-type", "").split(";")[0].strip().lower()
    if content_type in FORM_CONTENT_TYPES:
        form = await request.form()
        return form.get(field_name)

    body = await request.body()
    if not body.strip():
        return None
    try:
        parsed_body = await request.json()
    except ValueError:
        logger.debug("Ignoring malformed JSON body on %s", request.url.path)
        return None
    if not isinstance(parsed_body, dict):
        return None
    return parsed_body.get(field_name)
