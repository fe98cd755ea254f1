"""Thread-pool sizing shared by image loading and drawing."""

from __future__ import annotations

import os


def effective_workers(workers: int) -> int:
    """Thread count for a pool; ``0`` or less means "pick from the CPU count"."""
    if workers <= 0:
        cpu = os.cpu_count() or 4
        return min(32, max(1, cpu * 2))
    return workers
