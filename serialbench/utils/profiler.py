"""
Profiling utilities for serialbench.

This module provides a context manager to measure:
- Wall-clock time (perf_counter)
- Resident memory after the block (psutil)
- Peak Python allocations inside the block (tracemalloc, opt-in)

Codec operations on the sample dataset finish in microseconds, so memory is
taken as a single snapshot instead of a background sampler.

Usage examples:
    from serialbench.utils.profiler import profile_block

    with profile_block("json-encode") as stats:
        codec.encode(payload)

    print(stats.duration_seconds, stats.rss_bytes)
"""

from __future__ import annotations

import contextlib
import time
import tracemalloc
from dataclasses import dataclass, field
from typing import Generator, Optional

import psutil


@dataclass
class ProfileStats:
    """
    Container for profiling measurements.
    """

    label: str
    start_ts: float = field(default=0.0)
    end_ts: float = field(default=0.0)
    duration_seconds: float = field(default=0.0)
    rss_bytes: Optional[int] = field(default=None)
    peak_traced_bytes: Optional[int] = field(default=None)


@contextlib.contextmanager
def profile_block(
    label: str, enable_tracemalloc: bool = False
) -> Generator[ProfileStats, None, None]:
    """
    Context manager to profile a block of code.

    Parameters
    ----------
    label : str
        Human-friendly label for the profiled block.
    enable_tracemalloc : bool
        Whether to trace Python-level allocations. Tracing slows the block
        down, so durations measured with it on are not comparable.
    """
    stats = ProfileStats(label=label)

    tracemalloc_was_running = tracemalloc.is_tracing()
    if enable_tracemalloc:
        if tracemalloc_was_running:
            tracemalloc.reset_peak()
        else:
            tracemalloc.start()

    stats.start_ts = time.perf_counter()
    try:
        yield stats
    finally:
        stats.end_ts = time.perf_counter()
        stats.duration_seconds = max(stats.end_ts - stats.start_ts, 0.0)

        if enable_tracemalloc:
            _, peak_traced = tracemalloc.get_traced_memory()
            stats.peak_traced_bytes = peak_traced
            # Stop tracemalloc only if we started it
            if not tracemalloc_was_running:
                tracemalloc.stop()

        stats.rss_bytes = psutil.Process().memory_info().rss


__all__ = ["ProfileStats", "profile_block"]
