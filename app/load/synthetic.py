"""Blocking synthetic CPU load primitives.

The delay implemented here never yields. When it runs on the event loop,
every other request waits until it finishes.
"""

from __future__ import annotations

import math
import random
import sys
import time
from typing import Any, Callable

DEFAULT_LOAD_DURATION_MS = 1000
UNBOUNDED_LOAD_DURATION_MS = sys.maxsize


def load_parse_duration_ms(raw_duration: Any, max_duration_ms: int | None = None) -> int:
    """Resolve a caller-supplied duration into whole milliseconds.

    Args:
        raw_duration: Value taken from the request body, if any.
        max_duration_ms: Optional upper bound; `None` keeps durations unbounded.

    Returns:
        int: Non-negative duration in milliseconds. Missing or non-numeric
        input resolves to `DEFAULT_LOAD_DURATION_MS`; values too large for a
        float resolve to the cap, or `UNBOUNDED_LOAD_DURATION_MS` without one.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    duration_ms = _load_coerce_number(raw_duration)
    if duration_ms is None:
        duration_ms = float(DEFAULT_LOAD_DURATION_MS)

    if duration_ms == math.inf:
        resolved_ms = UNBOUNDED_LOAD_DURATION_MS
    elif duration_ms == -math.inf:
        resolved_ms = 0
    else:
        resolved_ms = max(0, math.ceil(duration_ms))
    if max_duration_ms is not None:
        resolved_ms = min(resolved_ms, max_duration_ms)
    return resolved_ms


def _load_coerce_number(raw_duration: Any) -> float | None:
    # bool is an int subclass; treat it as non-numeric
    if raw_duration is None or isinstance(raw_duration, bool):
        return None
    if isinstance(raw_duration, int):
        try:
            value = float(raw_duration)
        except OverflowError:
            value = math.inf if raw_duration > 0 else -math.inf
    elif isinstance(raw_duration, float):
        value = raw_duration
    elif isinstance(raw_duration, str):
        try:
            value = float(raw_duration.strip())
        except ValueError:
            return None
    else:
        return None
    if math.isnan(value):
        return None
    return value


def load_run_blocking_cpu_delay(
    duration_ms: int,
    clock: Callable[[], float] = time.monotonic,
) -> int:
    """Busy-wait on the calling thread until `duration_ms` have elapsed.

    Performs throwaway floating-point work on every iteration and never
    sleeps or yields.

    Args:
        duration_ms: Minimum wall-clock time to consume, in milliseconds.
        clock: Monotonic clock returning seconds.

    Returns:
        int: Measured elapsed milliseconds, always `>= duration_ms`.

    Raises:
        RuntimeError: This helper does not raise runtime errors.
    """

    started_at = clock()
    deadline = started_at + duration_ms / 1000.0
    accumulator = 0.0
    while clock() < deadline:
        accumulator += random.random() * random.random()

    # floor can undercut the deadline by float rounding
    elapsed_ms = math.floor((clock() - started_at) * 1000.0)
    return max(elapsed_ms, duration_ms)
