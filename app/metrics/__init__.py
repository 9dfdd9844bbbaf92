"""Metrics layer package for process and host introspection."""

from .interfaces import SystemMetricsPort
from .probe import PsutilSystemMetricsProbe

__all__ = ["PsutilSystemMetricsProbe", "SystemMetricsPort"]
