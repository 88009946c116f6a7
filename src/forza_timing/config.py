"""Runtime configuration, read from ``FORZA_TIMING_*`` environment variables."""

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv

_ENV_PREFIX = "FORZA_TIMING_"


@dataclass(frozen=True)
class TimingConfig:
    """Tunables for decoding, timing and the live feed."""

    min_datagram_length: int = 331  # bytes, Forza Motorsport DASH
    history_capacity: int = 10       # laps kept for consistency/pace trend
    min_projection_speed: float = 5.0  # m/s floor for sector projections
    queue_maxsize: int = 120         # ~2 s of samples at 60 Hz

    @classmethod
    def from_env(cls, dotenv_path: str | None = None) -> TimingConfig:
        """Build a config from the environment, after loading a ``.env`` file.

        Variables already set in the process environment take precedence over
        the ``.env`` file. Unset variables keep their defaults.

        Raises
        ------
        ValueError
            If a variable is set but cannot be parsed.
        """
        load_dotenv(dotenv_path)
        defaults = cls()
        return cls(
            min_datagram_length=_read("MIN_DATAGRAM_LENGTH", int, defaults.min_datagram_length),
            history_capacity=_read("HISTORY_CAPACITY", int, defaults.history_capacity),
            min_projection_speed=_read(
                "MIN_PROJECTION_SPEED", float, defaults.min_projection_speed
            ),
            queue_maxsize=_read("QUEUE_MAXSIZE", int, defaults.queue_maxsize),
        )


def _read(name: str, cast, default):
    raw = os.environ.get(_ENV_PREFIX + name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return cast(raw.strip())
    except ValueError as exc:
        raise ValueError(f"Invalid value for {_ENV_PREFIX}{name}: {raw!r}") from exc
