"""Tests for the psutil-backed system metrics probe."""

import os
import sys
import time
from datetime import datetime, timezone

import psutil
import pytest

import app.metrics.probe as probe_module
from app.metrics import PsutilSystemMetricsProbe


def test_metrics_snapshot_reflects_current_process_and_host() -> None:
    """Sample real process and host facts.

    Returns:
        None: Assertions validate sampled values.

    Raises:
        AssertionError: Raised when sampled values are implausible.
    """

    sampled_at = datetime(2024, 5, 1, 8, 30, tzinfo=timezone.utc)
    snapshot = PsutilSystemMetricsProbe().metrics_snapshot(now=sampled_at)

    assert snapshot.sampled_at == sampled_at
    assert snapshot.pid == os.getpid()
    assert snapshot.platform == sys.platform
    assert snapshot.memory_usage.rss > 0
    assert snapshot.memory_usage.vms >= snapshot.memory_usage.rss
    assert snapshot.cpu_usage.user >= 0
    assert snapshot.cpu_usage.system >= 0
    assert len(snapshot.load_average) == 3
    assert snapshot.total_memory >= snapshot.free_memory > 0
    assert snapshot.python_version.count(".") == 2


def test_metrics_uptime_counts_from_start_and_never_decreases() -> None:
    """Measure uptime on the monotonic clock from the supplied start.

    Returns:
        None: Assertions validate uptime behavior.

    Raises:
        AssertionError: Raised when uptime goes backwards.
    """

    probe = PsutilSystemMetricsProbe(started_at_monotonic=time.monotonic() - 5.0)

    first_uptime = probe.metrics_uptime_seconds()
    second_uptime = probe.metrics_snapshot(now=datetime.now(timezone.utc)).uptime_seconds

    assert first_uptime >= 5.0
    assert second_uptime >= first_uptime


def test_metrics_snapshot_wraps_psutil_errors(monkeypatch: pytest.MonkeyPatch) -> None:
    """Raise RuntimeError when psutil cannot read metrics.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate error mapping.

    Raises:
        AssertionError: Raised when psutil errors leak.
    """

    def _denied() -> object:
        raise psutil.AccessDenied(pid=os.getpid())

    monkeypatch.setattr(probe_module.psutil, "virtual_memory", _denied)

    with pytest.raises(RuntimeError, match="system metrics sampling failed"):
        PsutilSystemMetricsProbe().metrics_snapshot(now=datetime.now(timezone.utc))


def test_metrics_uptime_defaults_to_process_creation_time(monkeypatch: pytest.MonkeyPatch) -> None:
    """Count uptime from when the OS created the process, not from probe creation.

    Args:
        monkeypatch: Pytest monkeypatch fixture.

    Returns:
        None: Assertions validate the default uptime origin.

    Raises:
        AssertionError: Raised when uptime starts at probe construction.
    """

    created_at = time.time() - 30.0
    monkeypatch.setattr(probe_module.psutil.Process, "create_time", lambda _self: created_at)

    uptime_seconds = PsutilSystemMetricsProbe().metrics_uptime_seconds()

    assert 30.0 <= uptime_seconds < 35.0
