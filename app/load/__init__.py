"""Synthetic load package for CPU pressure simulation."""

from .synthetic import (
    DEFAULT_LOAD_DURATION_MS,
    UNBOUNDED_LOAD_DURATION_MS,
    load_parse_duration_ms,
    load_run_blocking_cpu_delay,
)

__all__ = [
    "DEFAULT_LOAD_DURATION_MS",
    "UNBOUNDED_LOAD_DURATION_MS",
    "load_parse_duration_ms",
    "load_run_blocking_cpu_delay",
]
