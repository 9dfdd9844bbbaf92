"""Domain models used across application layer boundaries."""

from .models import AppMetadata, CpuUsage, MemoryUsage, SystemSnapshot
from .timeline import domain_format_timestamp, domain_utc_now

__all__ = [
    "AppMetadata",
    "CpuUsage",
    "MemoryUsage",
    "SystemSnapshot",
    "domain_format_timestamp",
    "domain_utc_now",
]
