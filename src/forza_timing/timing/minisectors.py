"""MiniSectorTracker — nine equal mini-sectors (three per sector) per lap."""

from __future__ import annotations

import logging

from forza_timing.timing.models import MiniSectorInfo

_logger = logging.getLogger(__name__)

MINI_SECTOR_COUNT = 9
MINI_SECTORS_PER_SECTOR = 3


class MiniSectorTracker:
    """Times mini-sectors, tracks their personal bests and deltas.

    Deltas are recomputed only when the car moves into a different
    mini-sector, never on every sample inside the same one.

    ``main_sector_deltas[s]`` is the running sum of the deltas of the
    mini-sectors of sector *s* closed so far this lap.
    """

    def __init__(self) -> None:
        self.current_times: list[float] = [0.0] * MINI_SECTOR_COUNT
        self.best_times: list[float | None] = [None] * MINI_SECTOR_COUNT
        self.last_deltas: list[float] = [0.0] * MINI_SECTOR_COUNT
        self.main_sector_deltas: list[float] = [0.0] * (
            MINI_SECTOR_COUNT // MINI_SECTORS_PER_SECTOR
        )
        self.active_index: int = 0
        self.active_start_time: float | None = None
        self._last_lap_time: float = 0.0

    # ------------------------------------------------------------------
    # Public API
    # ------------------------------------------------------------------

    def update(self, lap_time: float, lap_distance: float, track_length: float) -> None:
        """Handle one sample at *lap_distance* metres into the lap."""
        mini_len = track_length / MINI_SECTOR_COUNT
        index = min(int(lap_distance // mini_len), MINI_SECTOR_COUNT - 1)

        if index != self.active_index:
            if self.active_start_time is not None:
                # Lap clock restarted at the line: the segment ended on the old clock.
                end_time = lap_time if lap_time >= self.active_start_time else self._last_lap_time
                self._close(self.active_index, end_time - self.active_start_time)
            self.active_index = index
            self.active_start_time = lap_time

        self._last_lap_time = lap_time

    def reset(self, lap_time: float) -> None:
        """Clear the per-lap state at lap completion. Personal bests are kept."""
        self.current_times = [0.0] * MINI_SECTOR_COUNT
        self.last_deltas = [0.0] * MINI_SECTOR_COUNT
        self.main_sector_deltas = [0.0] * len(self.main_sector_deltas)
        self.active_index = 0
        self.active_start_time = lap_time
        self._last_lap_time = lap_time

    def display_info(self) -> list[MiniSectorInfo]:
        """Return time, best and delta for every mini-sector."""
        return [
            MiniSectorInfo(
                index=i,
                time=self.current_times[i],
                best=self.best_times[i],
                delta=self.last_deltas[i],
            )
            for i in range(MINI_SECTOR_COUNT)
        ]

    def main_sector_delta(self, sector: int) -> float:
        """Return the summed mini-sector delta of *sector* so far this lap."""
        return self.main_sector_deltas[sector]

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _close(self, index: int, duration: float) -> None:
        if duration <= 0:
            return

        self.current_times[index] = duration
        best = self.best_times[index]
        if best is None or duration < best:
            self.best_times[index] = duration
            _logger.debug("Mini-sector %d personal best: %.3fs", index + 1, duration)

        self.last_deltas[index] = duration - self.best_times[index]

        sector = index // MINI_SECTORS_PER_SECTOR
        first = sector * MINI_SECTORS_PER_SECTOR
        self.main_sector_deltas[sector] = sum(self.last_deltas[first : index + 1])
