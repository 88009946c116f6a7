"""Timing view models returned by the engine's read-only queries."""

from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class SectorInfo:
    """Display value for one sector.

    When the sector has been timed this lap, ``time`` is that time and
    ``delta`` is ``time - best``. Otherwise ``time`` is the personal best
    (0.0 if none yet) and ``delta`` is None.
    """

    index: int
    time: float
    delta: float | None


@dataclass(frozen=True)
class MiniSectorInfo:
    """Current time, personal best and last delta of one mini-sector."""

    index: int
    time: float
    best: float | None
    delta: float


@dataclass(frozen=True)
class SectorProjection:
    """Live estimate of the time the car will need for the sector it is in.

    Positive ``delta`` means the projection is slower than the personal best.
    """

    sector: int

    elapsed: float
    """Seconds already spent in the sector."""

    remaining: float
    """Extrapolated seconds to the end of the sector."""

    best: float | None

    @property
    def projected(self) -> float:
        return self.elapsed + self.remaining

    @property
    def delta(self) -> float | None:
        if self.best is None:
            return None
        return self.projected - self.best
