"""Shared fixtures and test doubles for API tests."""

from __future__ import annotations

from datetime import datetime

import pytest
from fastapi.testclient import TestClient

from app.api.application import create_api_application
from app.config import AppSettings
from app.domain import CpuUsage, MemoryUsage, SystemSnapshot


class FixedMetricsProbe:
    """Test double returning deterministic metrics with a controllable uptime."""

    def __init__(self, uptime_seconds: float = 12.5, pid: int = 4242):
        self.uptime_seconds = uptime_seconds
        self.pid = pid
        self.snapshot_calls = 0

    def metrics_uptime_seconds(self) -> float:
        """Return the configured uptime.

        Returns:
            float: Uptime in seconds.
        """

        return self.uptime_seconds

    def metrics_snapshot(self, now: datetime) -> SystemSnapshot:
        """Return deterministic snapshot stamped with `now`.

        Args:
            now: Sampling instant.

        Returns:
            SystemSnapshot: Fixed metrics payload.
        """

        self.snapshot_calls += 1
        return SystemSnapshot(
            sampled_at=now,
            uptime_seconds=self.uptime_seconds,
            memory_usage=MemoryUsage(rss=1024, vms=4096),
            cpu_usage=CpuUsage(user=1500, system=300),
            load_average=(0.5, 0.25, 0.125),
            total_memory=8_000_000_000,
            free_memory=2_000_000_000,
            platform="linux",
            architecture="x86_64",
            pid=self.pid,
            python_version="3.12.1",
        )


def build_settings(**overrides: object) -> AppSettings:
    """Create deterministic test settings ignoring any local dotenv file.

    Args:
        **overrides: Field overrides.

    Returns:
        AppSettings: Settings for API creation.
    """

    values: dict[str, object] = {
        "cloud_provider": "AWS",
        "environment": "test",
        "version": "1.2.3",
        "port": 3000,
    }
    values.update(overrides)
    return AppSettings(_env_file=None, **values)


@pytest.fixture
def metrics_probe() -> FixedMetricsProbe:
    return FixedMetricsProbe()


@pytest.fixture
def settings() -> AppSettings:
    return build_settings()


@pytest.fixture
def client(settings: AppSettings, metrics_probe: FixedMetricsProbe) -> TestClient:
    return TestClient(create_api_application(settings, metrics_probe), raise_server_exceptions=False)
