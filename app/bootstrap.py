"""Application bootstrap wiring for startup validation and dependency assembly."""

from fastapi import FastAPI

from app.api import create_api_application
from app.config import AppSettings, config_configure_logging, config_load_settings
from app.metrics import PsutilSystemMetricsProbe


def bootstrap_create_application(settings: AppSettings | None = None) -> FastAPI:
    """Assemble the runtime application after validating startup configuration.

    Args:
        settings: Optional pre-loaded settings. Loaded from the environment when omitted.

    Returns:
        FastAPI: Fully initialized FastAPI application instance.

    Raises:
        SettingsLoadError: Raised when startup configuration validation fails.
    """

    resolved_settings = settings if settings is not None else config_load_settings()
    config_configure_logging(resolved_settings.log_level)
    metrics_probe = PsutilSystemMetricsProbe()
    return create_api_application(settings=resolved_settings, metrics_probe=metrics_probe)
