"""Clock and memory sources for candidate measurement.

Wall-clock timestamps come from ``time.perf_counter``.  Memory usage is
read through a *memory probe*: any zero-argument callable returning the
current usage in bytes.  The default, :func:`rss_memory_bytes`, reads the
resident set size of the process.  Reading it costs one call per
candidate and adds nothing per allocation, so it does not disturb the
timing it sits beside.

Memory deltas are approximate.  The allocator and the garbage collector
share the same memory, so they are directional signals only.
"""

from __future__ import annotations

import os
import resource
import sys
import time
from collections.abc import Callable
from decimal import ROUND_DOWN, Decimal

Clock = Callable[[], float]
MemoryProbe = Callable[[], int]

ELAPSED_QUANTUM = Decimal("0.0001")
_BYTES_PER_MB = 1024 * 1024


def now() -> float:
    """Return a high-resolution monotonic timestamp in seconds."""
    return time.perf_counter()


def elapsed_seconds(start: float, end: float) -> Decimal:
    """Return ``end - start`` truncated to four decimal places.

    Truncation (not rounding) keeps a sub-quantum measurement at ``0.0000``
    instead of bumping it up to ``0.0001``.
    """
    delta = Decimal(repr(end)) - Decimal(repr(start))
    return delta.quantize(ELAPSED_QUANTUM, rounding=ROUND_DOWN)


def bytes_to_mb(delta_bytes: int | float) -> float:
    """Convert a byte count to megabytes, rounded to 4 decimal places."""
    return round(delta_bytes / _BYTES_PER_MB, 4)


# ---------------------------------------------------------------------------
# Memory probes
# ---------------------------------------------------------------------------


def rss_memory_bytes() -> int:
    """Current resident set size of this process in bytes.

    Reads ``/proc/self/statm`` where available.  Elsewhere falls back to
    ``ru_maxrss``, which is the peak rather than the current RSS.
    """
    try:
        with open("/proc/self/statm") as f:
            resident_pages = int(f.read().split()[1])
        return resident_pages * os.sysconf("SC_PAGE_SIZE")
    except (OSError, ValueError, IndexError):
        pass

    # ru_maxrss is KB on Linux, bytes on macOS.
    maxrss = resource.getrusage(resource.RUSAGE_SELF).ru_maxrss
    if sys.platform == "darwin":
        return maxrss
    return maxrss * 1024

