"""TimingEngine — turns a stream of DASH samples into live lap/sector timing.

The engine is fed one :class:`~forza_timing.telemetry.models.TelemetrySample`
at a time, in arrival order, from a single thread. Track length is not known
up front: Forza reports a negative distance before the start line whose
magnitude is the lap length, so the first reading below
``TRACK_BOOTSTRAP_DISTANCE`` fixes the track length for the rest of the
session.

Lap boundaries are detected from the lap distance wrapping from the last
tenth of the track back towards zero. Sectors 1 and 2 close on explicit
boundary crossings; sector 3 closes with the lap itself.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field

from forza_timing.config import TimingConfig
from forza_timing.telemetry.models import TelemetrySample
from forza_timing.timing.history import LapHistory
from forza_timing.timing.minisectors import MiniSectorTracker
from forza_timing.timing.models import SectorInfo, SectorProjection
from forza_timing.timing.schemas import (
    MiniSectorSnapshot,
    ProjectionSnapshot,
    SectorSnapshot,
    TimingSnapshot,
)

_logger = logging.getLogger(__name__)

SECTOR_COUNT = 3
TRACK_BOOTSTRAP_DISTANCE = -100.0  # metres
LAP_WRAP_FRACTION = 0.9


def _zeros() -> list[float]:
    return [0.0] * SECTOR_COUNT


def _unset() -> list[float | None]:
    return [None] * SECTOR_COUNT


@dataclass
class SessionState:
    """All timing state of the single active session.

    ``best_sector_times`` entries are None until the sector is first timed.
    ``sector_cross_times`` holds the lap-clock value at which each boundary
    was crossed this lap; 0.0 means not crossed yet.
    """

    track_length_m: float | None = None
    initial_distance: float | None = None
    prev_lap_distance: float = 0.0

    current_sector_times: list[float] = field(default_factory=_zeros)
    best_sector_times: list[float | None] = field(default_factory=_unset)
    last_sector_times: list[float] = field(default_factory=_zeros)
    sector_cross_times: list[float] = field(default_factory=_zeros)

    mini_sectors: MiniSectorTracker = field(default_factory=MiniSectorTracker)
    lap_history: LapHistory = field(default_factory=LapHistory)
    first_lap_completed: bool = False
    laps_completed: int = 0

    # Most recent positioned sample, used by the live views.
    lap_time: float = 0.0
    lap_distance: float | None = None
    velocity: float = 0.0

    last_sample: TelemetrySample | None = None
    recorded_lap: tuple[float, int] | None = None


class TimingEngine:
    """Stateful sector, mini-sector and lap timing for one session.

    Args:
        config: Tunables; defaults to :class:`TimingConfig` defaults.
    """

    def __init__(self, config: TimingConfig | None = None) -> None:
        self._cfg = config or TimingConfig()
        self.state = self._new_state()

    # ------------------------------------------------------------------
    # Ingestion
    # ------------------------------------------------------------------

    def ingest(self, sample: TelemetrySample) -> None:
        """Update the session with one sample."""
        s = self.state
        s.last_sample = sample

        if s.track_length_m is None:
            if sample.distance < TRACK_BOOTSTRAP_DISTANCE:
                s.track_length_m = abs(sample.distance)
                s.initial_distance = sample.distance
                _logger.info("Track length detected: %.1f m", s.track_length_m)
            return

        if sample.distance < 0:
            return

        track_length = s.track_length_m
        lap_distance = sample.distance % track_length
        sector_len = track_length / SECTOR_COUNT
        lap_time = sample.lap_time

        s.mini_sectors.update(lap_time, lap_distance, track_length)

        if (
            lap_distance < s.prev_lap_distance
            and s.prev_lap_distance > LAP_WRAP_FRACTION * track_length
        ):
            self._complete_lap(lap_time)

        # The last sector has no boundary check; the lap reset above closes it.
        for i in range(SECTOR_COUNT - 1):
            boundary = (i + 1) * sector_len
            if (
                s.sector_cross_times[i] == 0
                and lap_distance >= boundary
                and s.prev_lap_distance < boundary
            ):
                s.sector_cross_times[i] = lap_time
                start = s.sector_cross_times[i - 1] if i > 0 else 0.0
                self._record_sector(i, lap_time - start)

        s.prev_lap_distance = lap_distance
        s.lap_time = lap_time
        s.lap_distance = lap_distance
        s.velocity = sample.velocity

        self._record_lap_history(sample)

    def reset(self) -> None:
        """Forget everything, including the detected track length."""
        self.state = self._new_state()
        _logger.info("Timing session reset")

    # ------------------------------------------------------------------
    # Read-only views
    # ------------------------------------------------------------------

    def consistency(self) -> float:
        """Standard deviation of the recent lap times."""
        return self.state.lap_history.consistency()

    def pace_trend(self) -> float:
        """Newest minus oldest recent lap time; negative means improving."""
        return self.state.lap_history.pace_trend()

    def current_sector(self) -> int | None:
        """Index of the sector the car is in, or None before it is on track."""
        s = self.state
        if s.track_length_m is None or s.lap_distance is None:
            return None
        sector_len = s.track_length_m / SECTOR_COUNT
        return min(int(s.lap_distance // sector_len), SECTOR_COUNT - 1)

    def sector_display_info(self) -> list[SectorInfo]:
        """Per sector: this lap's time and delta to PB, or the PB with no delta."""
        s = self.state
        info: list[SectorInfo] = []
        for i in range(SECTOR_COUNT):
            time = s.current_sector_times[i]
            best = s.best_sector_times[i]
            if time > 0:
                delta = time - best if best is not None else None
                info.append(SectorInfo(index=i, time=time, delta=delta))
            else:
                info.append(SectorInfo(index=i, time=best or 0.0, delta=None))
        return info

    def projected_sector_time(self, sector: int | None = None) -> SectorProjection | None:
        """Estimate the time for the sector the car is currently in.

        The remaining distance is divided by the current speed, floored at
        ``min_projection_speed`` so a near-stationary car does not produce
        absurd projections. Returns None when *sector* is not the current
        sector, its entry was not timed this lap, or the car has not been
        positioned yet.
        """
        s = self.state
        current = self.current_sector()
        if current is None:
            return None
        if sector is None:
            sector = current
        if sector != current:
            return None

        sector_len = s.track_length_m / SECTOR_COUNT
        remaining_m = max((sector + 1) * sector_len - s.lap_distance, 0.0)
        start = s.sector_cross_times[sector - 1] if sector > 0 else 0.0
        if sector > 0 and start == 0:
            return None
        speed = max(abs(s.velocity), self._cfg.min_projection_speed)
        return SectorProjection(
            sector=sector,
            elapsed=max(s.lap_time - start, 0.0),
            remaining=remaining_m / speed,
            best=s.best_sector_times[sector],
        )

    def live_delta(self) -> float:
        """Sum of this lap's main-sector deltas to the mini-sector bests."""
        return sum(self.state.mini_sectors.main_sector_deltas)

    def snapshot(self) -> TimingSnapshot:
        """Return an immutable copy of everything a display needs."""
        s = self.state
        sample = s.last_sample
        mini = s.mini_sectors

        sectors = [
            SectorSnapshot(
                index=info.index,
                current=s.current_sector_times[info.index],
                best=s.best_sector_times[info.index],
                last=s.last_sector_times[info.index],
                display_time=info.time,
                delta=info.delta,
                main_delta=mini.main_sector_delta(info.index),
            )
            for info in self.sector_display_info()
        ]
        mini_sectors = [
            MiniSectorSnapshot(index=m.index, time=m.time, best=m.best, delta=m.delta)
            for m in mini.display_info()
        ]
        projection = self.projected_sector_time()

        return TimingSnapshot(
            track_length_m=s.track_length_m,
            lap_number=sample.lap_number if sample else 0,
            lap_distance=s.lap_distance or 0.0,
            current_sector=self.current_sector(),
            current_lap_time=sample.lap_time if sample else 0.0,
            last_lap_time=sample.last_lap_time if sample else 0.0,
            best_lap_time=sample.best_lap_time if sample else 0.0,
            race_position=sample.race_position if sample else 0,
            speed_mph=sample.speed_mph if sample else 0.0,
            car_ordinal=sample.car_ordinal if sample else 0,
            car_class=sample.car_class if sample else 0,
            performance_index=sample.performance_index if sample else 0,
            track_ordinal=sample.track_ordinal if sample else 0,
            sectors=sectors,
            mini_sectors=mini_sectors,
            live_delta=self.live_delta(),
            projection=(
                ProjectionSnapshot(
                    sector=projection.sector,
                    projected=projection.projected,
                    best=projection.best,
                    delta=projection.delta,
                )
                if projection
                else None
            ),
            lap_history=s.lap_history.laps(),
            consistency=self.consistency(),
            pace_trend=self.pace_trend(),
        )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    def _new_state(self) -> SessionState:
        return SessionState(lap_history=LapHistory(self._cfg.history_capacity))

    def _record_sector(self, index: int, duration: float) -> None:
        # Zero-length sectors come from samples that skip a whole sector.
        if duration <= 0:
            return
        s = self.state
        s.current_sector_times[index] = duration
        best = s.best_sector_times[index]
        if best is None or duration < best:
            s.best_sector_times[index] = duration
            _logger.debug("Sector %d personal best: %.3fs", index + 1, duration)
        _logger.debug("Sector %d: %.3fs", index + 1, duration)

    def _complete_lap(self, lap_time: float) -> None:
        s = self.state
        last = SECTOR_COUNT - 1
        # s.lap_time is still the final lap-clock value of the lap just finished.
        if s.sector_cross_times[last - 1] > 0:
            self._record_sector(last, s.lap_time - s.sector_cross_times[last - 1])

        s.last_sector_times = list(s.current_sector_times)
        s.current_sector_times = _zeros()
        s.sector_cross_times = _zeros()
        s.first_lap_completed = True
        s.laps_completed += 1
        s.mini_sectors.reset(lap_time)

        _logger.info(
            "Lap %d complete in %.3fs (sectors %s)",
            s.laps_completed,
            s.lap_time,
            ", ".join(f"{t:.3f}" for t in s.last_sector_times),
        )

    def _record_lap_history(self, sample: TelemetrySample) -> None:
        # DASH repeats last_lap_time on every packet; record each lap once.
        if sample.last_lap_time <= 0:
            return
        key = (sample.last_lap_time, sample.lap_number)
        if key == self.state.recorded_lap:
            return
        self.state.recorded_lap = key
        self.state.lap_history.push(sample.last_lap_time)
