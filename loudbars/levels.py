"""Bounded loudness history shared between the extractor and the chart."""

from __future__ import annotations

from collections import deque
import math
import threading
from typing import Deque, List

from loudbars.config import WINDOW_SIZE


class LevelBuffer:
    """Lock-guarded FIFO of the most recent normalised loudness values."""

    def __init__(self, capacity: int = WINDOW_SIZE) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be at least 1, got {capacity}")
        self._capacity = capacity
        self._values: Deque[float] = deque()
        self._lock = threading.Lock()

    @property
    def capacity(self) -> int:
        return self._capacity

    def append(self, value: float) -> None:
        """Push ``value`` and drop the oldest entry once over capacity."""
        value = float(value)
        value = min(max(value, 0.0), 1.0) if math.isfinite(value) else 0.0
        with self._lock:
            self._values.append(value)
            if len(self._values) > self._capacity:
                self._values.popleft()

    def snapshot(self) -> List[float]:
        """Return a copy of the current history, oldest first."""
        with self._lock:
            return list(self._values)

    def __len__(self) -> int:
        with self._lock:
            return len(self._values)
