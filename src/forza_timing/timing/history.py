"""LapHistory — bounded record of recently completed lap times."""

from __future__ import annotations

import statistics
from collections import deque

DEFAULT_CAPACITY = 10


class LapHistory:
    """Keeps the most recent *capacity* lap times, evicting the oldest first.

    Args:
        capacity: Maximum number of laps retained.
    """

    def __init__(self, capacity: int = DEFAULT_CAPACITY) -> None:
        if capacity < 1:
            raise ValueError(f"capacity must be >= 1, got {capacity}")
        self._laps: deque[float] = deque(maxlen=capacity)

    def __len__(self) -> int:
        return len(self._laps)

    @property
    def capacity(self) -> int:
        return self._laps.maxlen

    def push(self, lap_time: float) -> None:
        """Append *lap_time*; drops the oldest entry once capacity is exceeded."""
        self._laps.append(lap_time)

    def laps(self) -> list[float]:
        """Return the retained lap times, oldest first."""
        return list(self._laps)

    def clear(self) -> None:
        self._laps.clear()

    def consistency(self) -> float:
        """Population standard deviation of the retained laps (0 with < 2 laps)."""
        if len(self._laps) < 2:
            return 0.0
        return statistics.pstdev(self._laps)

    def pace_trend(self) -> float:
        """Newest minus oldest lap time (0 with < 2 laps).

        Negative means the driver is getting faster.
        """
        if len(self._laps) < 2:
            return 0.0
        return self._laps[-1] - self._laps[0]
