"""psutil-backed system metrics probe."""

from __future__ import annotations

import os
import platform
import sys
import time
from datetime import datetime

import psutil

from app.domain import CpuUsage, MemoryUsage, SystemSnapshot

from .interfaces import SystemMetricsPort

MICROSECONDS_PER_SECOND = 1_000_000


def probe_process_start_monotonic(process: psutil.Process) -> float:
    """Return the monotonic clock reading that corresponds to process creation."""

    seconds_since_creation = max(0.0, time.time() - process.create_time())
    return time.monotonic() - seconds_since_creation


class PsutilSystemMetricsProbe(SystemMetricsPort):
    """Sample metrics for the current process and host through psutil."""

    def __init__(self, started_at_monotonic: float | None = None):
        """Initialize the probe for the serving process.

        Args:
            started_at_monotonic: Monotonic clock reading taken at process start.
                Defaults to the process creation time reported by the OS,
                translated onto the monotonic clock.
        """

        self._process = psutil.Process(os.getpid())
        if started_at_monotonic is None:
            started_at_monotonic = probe_process_start_monotonic(self._process)
        self._started_at_monotonic = started_at_monotonic

    def metrics_uptime_seconds(self) -> float:
        return max(0.0, time.monotonic() - self._started_at_monotonic)

    def metrics_snapshot(self, now: datetime) -> SystemSnapshot:
        """Sample process and host metrics at the given instant.

        Args:
            now: Sampling instant recorded on the snapshot.

        Returns:
            SystemSnapshot: Freshly sampled metrics.

        Raises:
            RuntimeError: Raised when psutil cannot read process metrics.
        """

        try:
            with self._process.oneshot():
                memory_info = self._process.memory_info()
                cpu_times = self._process.cpu_times()
            virtual_memory = psutil.virtual_memory()
            load_1, load_5, load_15 = psutil.getloadavg()
        except psutil.Error as error:
            raise RuntimeError("system metrics sampling failed") from error

        return SystemSnapshot(
            sampled_at=now,
            uptime_seconds=self.metrics_uptime_seconds(),
            memory_usage=MemoryUsage(rss=int(memory_info.rss), vms=int(memory_info.vms)),
            cpu_usage=CpuUsage(
                user=int(cpu_times.user * MICROSECONDS_PER_SECOND),
                system=int(cpu_times.system * MICROSECONDS_PER_SECOND),
            ),
            load_average=(float(load_1), float(load_5), float(load_15)),
            total_memory=int(virtual_memory.total),
            free_memory=int(virtual_memory.available),
            platform=sys.platform,
            architecture=platform.machine(),
            pid=os.getpid(),
            python_version=platform.python_version(),
        )
