"""Typed runtime settings with dotenv support and startup validation."""

from importlib.metadata import PackageNotFoundError, version as package_version

from pydantic import AliasChoices, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DISTRIBUTION_NAME = "multicloud-webapp"
FALLBACK_VERSION = "0.0.0"


class SettingsLoadError(RuntimeError):
    """Raised when runtime settings cannot be loaded or validated."""


def config_resolve_version() -> str:
    """Return the application version from installed distribution metadata.

    Returns:
        str: Installed package version, or a fallback marker when the
        application runs from a source tree that was never installed.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    try:
        return package_version(DISTRIBUTION_NAME)
    except PackageNotFoundError:
        return FALLBACK_VERSION


class AppSettings(BaseSettings):
    """Application settings for the reporting service runtime.

    Environment variable names map directly to field names in uppercase.
    Example: `cloud_provider` reads from `CLOUD_PROVIDER`. The environment
    label also accepts `NODE_ENV` when `ENVIRONMENT` is not set.

    Attributes:
        application_name: Human-readable application name.
        version: Application version, read from build metadata by default.
        cloud_provider: Deployment label echoed in every response.
        environment: Runtime environment label.
        host: Host interface for web server binding.
        port: Web server port.
        log_level: Root log level name.
        graceful_shutdown: Drain connections on SIGINT/SIGTERM instead of exiting immediately.
        load_offload_enabled: Run synthetic load in the worker threadpool instead of the event loop.
        load_max_duration_ms: Optional upper bound for synthetic load duration.
    """

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        case_sensitive=False,
        frozen=True,
        populate_by_name=True,
    )

    application_name: str = Field(default="Multi-Cloud Web App", min_length=1)
    version: str = Field(default_factory=config_resolve_version)
    cloud_provider: str = Field(default="Unknown")
    environment: str = Field(
        default="development",
        validation_alias=AliasChoices("environment", "node_env"),
    )
    host: str = Field(default="0.0.0.0")
    port: int = Field(default=3000, ge=1, le=65535)
    log_level: str = Field(default="INFO")
    graceful_shutdown: bool = Field(default=False)
    load_offload_enabled: bool = Field(default=False)
    load_max_duration_ms: int | None = Field(default=None, ge=0)

    @field_validator("cloud_provider", "environment")
    @classmethod
    def _validate_label(cls, value: str) -> str:
        stripped_value = value.strip()
        if not stripped_value:
            raise ValueError("value must not be blank")
        return stripped_value

    @field_validator("log_level")
    @classmethod
    def _validate_log_level(cls, value: str) -> str:
        normalized_value = value.strip().upper()
        if normalized_value not in {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}:
            raise ValueError(f"unsupported log level {value!r}")
        return normalized_value


def config_load_settings(**overrides: object) -> AppSettings:
    """Load and validate runtime settings from environment and dotenv.

    Args:
        **overrides: Field values that take precedence over environment and dotenv.

    Returns:
        AppSettings: Validated runtime settings object.

    Raises:
        SettingsLoadError: Raised when settings are invalid.
    """

    try:
        return AppSettings(**overrides)
    except ValidationError as error:
        raise SettingsLoadError(
            f"Startup configuration validation failed. Update .env or environment variables. Details: {error}"
        ) from error
