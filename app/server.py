"""uvicorn server wiring with the process shutdown policy."""

from __future__ import annotations

import logging
import os
import signal
from types import FrameType

import uvicorn
from fastapi import FastAPI

from app.config import AppSettings

logger = logging.getLogger(__name__)


class ServiceServer(uvicorn.Server):
    """uvicorn server that exits immediately on SIGINT/SIGTERM unless draining is enabled.

    Immediate exit drops in-flight requests without a grace period.
    """

    def __init__(self, config: uvicorn.Config, graceful_shutdown: bool = False):
        super().__init__(config)
        self._graceful_shutdown = graceful_shutdown

    def handle_exit(self, sig: int, frame: FrameType | None) -> None:
        signal_name = server_signal_name(sig)
        if self._graceful_shutdown:
            logger.info("Received %s, draining connections before shutdown...", signal_name)
            super().handle_exit(sig, frame)
            return

        logger.info("Received %s, shutting down...", signal_name)
        logging.shutdown()
        os._exit(0)


def server_signal_name(sig: int) -> str:
    try:
        return signal.Signals(sig).name
    except ValueError:
        return str(sig)


def server_create(application: FastAPI, settings: AppSettings) -> ServiceServer:
    """Build the HTTP server for one application instance.

    Args:
        application: ASGI application to serve.
        settings: Runtime settings providing bind address and shutdown policy.

    Returns:
        ServiceServer: Configured, not yet started server.

    Raises:
        ValueError: Raised when dependencies are invalid.
    """

    if application is None:
        raise ValueError("application must not be None")

    config = uvicorn.Config(
        application,
        host=settings.host,
        port=settings.port,
        access_log=False,
        server_header=False,
        log_config=None,
    )
    return ServiceServer(config, graceful_shutdown=settings.graceful_shutdown)
