"""FrameDecoder — converts a raw Forza DASH datagram to TelemetrySample."""

from __future__ import annotations

import math
import struct

from forza_timing.telemetry.models import TelemetrySample

# ---------------------------------------------------------------------------
# DASH datagram layout (Forza Motorsport 2023, all offsets in bytes)
# ---------------------------------------------------------------------------

DASH_PACKET_SIZE = 331

# sample field → (offset, struct format). All values are little-endian.
DASH_LAYOUT: dict[str, tuple[int, str]] = {
    # field                  offset  fmt
    "is_race_on":           (0,   "<i"),
    "timestamp_ms":         (4,   "<I"),
    "engine_max_rpm":       (8,   "<f"),
    "engine_idle_rpm":      (12,  "<f"),
    "rpm":                  (16,  "<f"),
    "acceleration_x":       (20,  "<f"),
    "acceleration_y":       (24,  "<f"),
    "acceleration_z":       (28,  "<f"),
    "velocity_x":           (32,  "<f"),
    "velocity_y":           (36,  "<f"),
    "velocity_z":           (40,  "<f"),
    "angular_velocity_x":   (44,  "<f"),
    "angular_velocity_y":   (48,  "<f"),
    "angular_velocity_z":   (52,  "<f"),
    "yaw":                  (56,  "<f"),
    "pitch":                (60,  "<f"),
    "roll":                 (64,  "<f"),
    "car_ordinal":          (212, "<i"),
    "car_class":            (216, "<i"),
    "performance_index":    (220, "<i"),
    "drivetrain":           (224, "<i"),
    "num_cylinders":        (228, "<i"),
    "position_x":           (232, "<f"),
    "position_y":           (236, "<f"),
    "position_z":           (240, "<f"),
    "speed":                (244, "<f"),
    "power":                (248, "<f"),
    "torque":               (252, "<f"),
    "boost":                (272, "<f"),
    "fuel":                 (276, "<f"),
    "distance":             (280, "<f"),
    "best_lap_time":        (284, "<f"),
    "last_lap_time":        (288, "<f"),
    "lap_time":             (292, "<f"),
    "race_time":            (296, "<f"),
    "lap_number":           (300, "<H"),
    "race_position":        (302, "<B"),
    "throttle":             (303, "<B"),
    "brake":                (304, "<B"),
    "clutch":               (305, "<B"),
    "handbrake":            (306, "<B"),
    "gear":                 (307, "<B"),
    "steer":                (308, "<b"),
    "track_ordinal":        (327, "<i"),
}


class MalformedFrame(ValueError):
    """Raised when a datagram is too short or not a byte buffer."""


def _finite(value: float) -> float:
    """Return *value*, with NaN/Inf replaced by 0.0."""
    return value if math.isfinite(value) else 0.0


class FrameDecoder:
    """Decodes a Forza DASH datagram into a :class:`TelemetrySample`.

    Stateless; one instance may be shared by any number of callers.

    Parameters
    ----------
    min_length:
        Minimum accepted datagram length in bytes. Shorter buffers raise
        :class:`MalformedFrame`. Longer buffers are accepted and the extra
        bytes ignored.
    """

    def __init__(self, min_length: int = DASH_PACKET_SIZE) -> None:
        if min_length < DASH_PACKET_SIZE:
            raise ValueError(
                f"min_length must be >= {DASH_PACKET_SIZE}, got {min_length}"
            )
        self.min_length = min_length

    def decode(self, buffer: bytes | bytearray | memoryview) -> TelemetrySample:
        """Convert *buffer* to a validated :class:`TelemetrySample`.

        Raises
        ------
        MalformedFrame
            If *buffer* is not bytes-like or shorter than ``min_length``.
        """
        if not isinstance(buffer, (bytes, bytearray, memoryview)):
            raise MalformedFrame(
                f"Expected a byte buffer, got {type(buffer).__name__}"
            )
        if len(buffer) < self.min_length:
            raise MalformedFrame(
                f"DASH datagram too short: {len(buffer)} < {self.min_length} bytes"
            )

        kwargs: dict = {}
        for field, (offset, fmt) in DASH_LAYOUT.items():
            (value,) = struct.unpack_from(fmt, buffer, offset)
            if fmt == "<f":
                value = _finite(value)
            kwargs[field] = value

        kwargs["is_race_on"] = kwargs["is_race_on"] != 0
        kwargs["velocity"] = math.sqrt(
            kwargs["velocity_x"] ** 2
            + kwargs["velocity_y"] ** 2
            + kwargs["velocity_z"] ** 2
        )
        return TelemetrySample(**kwargs)
