"""Live lap, sector and mini-sector timing."""

from forza_timing.timing.engine import SECTOR_COUNT, SessionState, TimingEngine
from forza_timing.timing.history import LapHistory
from forza_timing.timing.minisectors import MINI_SECTOR_COUNT, MiniSectorTracker
from forza_timing.timing.models import MiniSectorInfo, SectorInfo, SectorProjection
from forza_timing.timing.schemas import TimingSnapshot

__all__ = [
    "MINI_SECTOR_COUNT",
    "SECTOR_COUNT",
    "LapHistory",
    "MiniSectorInfo",
    "MiniSectorTracker",
    "SectorInfo",
    "SectorProjection",
    "SessionState",
    "TimingEngine",
    "TimingSnapshot",
]
