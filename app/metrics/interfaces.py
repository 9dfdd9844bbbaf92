"""Typed interfaces for system metrics sampling."""

from datetime import datetime
from typing import Protocol

from app.domain import SystemSnapshot


class SystemMetricsPort(Protocol):
    """Port definition for point-in-time process and host metrics."""

    def metrics_uptime_seconds(self) -> float:
        """Return seconds elapsed since the process started serving.

        Returns:
            float: Monotonic, non-decreasing uptime in seconds.

        Raises:
            RuntimeError: Raised when the clock cannot be read.
        """

    def metrics_snapshot(self, now: datetime) -> SystemSnapshot:
        """Sample process and host metrics at the given instant.

        Args:
            now: Sampling instant recorded on the snapshot.

        Returns:
            SystemSnapshot: Freshly sampled metrics; never cached.

        Raises:
            RuntimeError: Raised when the operating system refuses metric reads.
        """
