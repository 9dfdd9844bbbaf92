"""Typed domain models shared across runtime layers.

This module provides simple immutable data contracts for the point-in-time
process and host metrics returned by reporting endpoints.
"""

from dataclasses import asdict, dataclass
from datetime import datetime


@dataclass(frozen=True)
class AppMetadata:
    """Static application metadata for runtime identification.

    Attributes:
        application_name: Human-readable app name.
        version: Application version string.
        cloud_provider: Deployment label echoed in responses.
        environment_name: Runtime environment label.
    """

    application_name: str
    version: str
    cloud_provider: str
    environment_name: str


@dataclass(frozen=True)
class MemoryUsage:
    """Process memory usage in bytes.

    Attributes:
        rss: Resident set size.
        vms: Virtual memory size.
    """

    rss: int
    vms: int

    def as_payload(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class CpuUsage:
    """Cumulative process CPU time in microseconds.

    Attributes:
        user: Time spent in user mode.
        system: Time spent in kernel mode.
    """

    user: int
    system: int

    def as_payload(self) -> dict[str, int]:
        return asdict(self)


@dataclass(frozen=True)
class SystemSnapshot:
    """Point-in-time aggregation of process and operating-system metrics.

    Attributes:
        sampled_at: Sampling instant in UTC.
        uptime_seconds: Seconds since the process started serving.
        memory_usage: Process memory usage.
        cpu_usage: Process CPU usage counters.
        load_average: System load averages over 1, 5 and 15 minutes.
        total_memory: Total system memory in bytes.
        free_memory: Available system memory in bytes.
        platform: Operating system platform identifier.
        architecture: CPU architecture identifier.
        pid: Serving process identifier.
        python_version: Interpreter version string.
    """

    sampled_at: datetime
    uptime_seconds: float
    memory_usage: MemoryUsage
    cpu_usage: CpuUsage
    load_average: tuple[float, float, float]
    total_memory: int
    free_memory: int
    platform: str
    architecture: str
    pid: int
    python_version: str
