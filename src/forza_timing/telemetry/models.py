"""Telemetry data models."""

from __future__ import annotations

from dataclasses import dataclass

_MPS_TO_MPH = 2.23694


@dataclass(frozen=True)
class TelemetrySample:
    """A single decoded Forza DASH datagram.

    Only the timing fields are consumed by the timing engine; the remaining
    vehicle/physics fields are carried through for display consumers.
    """

    distance: float
    """Distance travelled in metres. Negative before the start line."""

    lap_time: float
    """Elapsed time of the current lap in seconds."""

    last_lap_time: float
    """Simulator-reported time of the previous lap (0 if none)."""

    best_lap_time: float
    """Simulator-reported best lap time of the session (0 if none)."""

    lap_number: int
    """Current lap number (0-based, unsigned)."""

    velocity: float
    """Magnitude of the velocity vector in m/s."""

    race_time: float = 0.0
    race_position: int = 0

    is_race_on: bool = False
    timestamp_ms: int = 0
    engine_max_rpm: float = 0.0
    engine_idle_rpm: float = 0.0
    rpm: float = 0.0
    acceleration_x: float = 0.0
    acceleration_y: float = 0.0
    acceleration_z: float = 0.0
    velocity_x: float = 0.0
    velocity_y: float = 0.0
    velocity_z: float = 0.0
    angular_velocity_x: float = 0.0
    angular_velocity_y: float = 0.0
    angular_velocity_z: float = 0.0
    yaw: float = 0.0
    pitch: float = 0.0
    roll: float = 0.0

    car_ordinal: int = 0
    car_class: int = 0
    performance_index: int = 0
    drivetrain: int = 0
    num_cylinders: int = 0
    track_ordinal: int = 0

    position_x: float = 0.0
    position_y: float = 0.0
    position_z: float = 0.0
    speed: float = 0.0
    power: float = 0.0
    torque: float = 0.0
    boost: float = 0.0
    fuel: float = 0.0

    throttle: int = 0
    """Throttle input 0-255."""

    brake: int = 0
    """Brake input 0-255."""

    clutch: int = 0
    handbrake: int = 0
    gear: int = 0
    steer: int = 0
    """Steering input -127..127. Positive = right."""

    @property
    def speed_mph(self) -> float:
        """Velocity magnitude converted to miles per hour."""
        return self.velocity * _MPS_TO_MPH
