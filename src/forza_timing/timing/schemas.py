"""Pydantic snapshot schemas handed to display consumers."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class _Snapshot(BaseModel):
    model_config = ConfigDict(frozen=True)


class SectorSnapshot(_Snapshot):
    index: int
    current: float
    best: float | None
    last: float
    display_time: float
    delta: float | None
    main_delta: float


class MiniSectorSnapshot(_Snapshot):
    index: int
    time: float
    best: float | None
    delta: float


class ProjectionSnapshot(_Snapshot):
    sector: int
    projected: float
    best: float | None
    delta: float | None


class TimingSnapshot(_Snapshot):
    """Everything a dashboard needs after one ingested sample.

    Valid until the next sample is ingested; it is a copy and never changes.
    Ordinals (``car_ordinal``, ``track_ordinal`` ...) are raw simulator ids;
    resolving them to names is up to the consumer.
    """

    track_length_m: float | None
    lap_number: int
    lap_distance: float
    current_sector: int | None
    current_lap_time: float
    last_lap_time: float
    best_lap_time: float
    race_position: int
    speed_mph: float

    car_ordinal: int
    car_class: int
    performance_index: int
    track_ordinal: int

    sectors: list[SectorSnapshot]
    mini_sectors: list[MiniSectorSnapshot]
    live_delta: float
    projection: ProjectionSnapshot | None

    lap_history: list[float]
    consistency: float
    pace_trend: float
