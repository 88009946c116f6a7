"""Tests for MiniSectorTracker."""

from __future__ import annotations

from unittest.mock import MagicMock

import pytest

from forza_timing.timing.minisectors import MINI_SECTOR_COUNT, MiniSectorTracker
from forza_timing.timing.models import MiniSectorInfo

TRACK = 900.0  # 100 m mini-sectors


def run_lap(tracker: MiniSectorTracker, mini_times: list[float]) -> None:
    """Drive one lap from the line, spending ``mini_times[i]`` in mini-sector i.

    Leaves the car just inside the mini-sector after the last one timed.
    """
    tracker.reset(0.0)
    t = 0.0
    for i, dt in enumerate(mini_times):
        tracker.update(t, i * 100.0 + 50.0, TRACK)
        t += dt
        tracker.update(t, (i + 1) * 100.0 + 10.0, TRACK)


# ---------------------------------------------------------------------------
# First transition / start guard
# ---------------------------------------------------------------------------


def test_first_transition_closes_nothing():
    tracker = MiniSectorTracker()
    tracker.update(1.0, 50.0, TRACK)
    tracker.update(5.0, 150.0, TRACK)

    assert tracker.current_times == [0.0] * MINI_SECTOR_COUNT
    assert tracker.best_times == [None] * MINI_SECTOR_COUNT
    assert tracker.active_index == 1
    assert tracker.active_start_time == 5.0


def test_close_records_time_and_first_value_becomes_pb():
    tracker = MiniSectorTracker()
    tracker.update(1.0, 50.0, TRACK)
    tracker.update(5.0, 150.0, TRACK)
    tracker.update(9.0, 250.0, TRACK)

    assert tracker.current_times[1] == pytest.approx(4.0)
    assert tracker.best_times[1] == pytest.approx(4.0)
    assert tracker.last_deltas[1] == 0.0


# ---------------------------------------------------------------------------
# Personal bests and deltas
# ---------------------------------------------------------------------------


def test_slower_mini_sector_keeps_pb_and_reports_delta():
    tracker = MiniSectorTracker()
    run_lap(tracker, [3.0])
    run_lap(tracker, [4.0])

    assert tracker.best_times[0] == pytest.approx(3.0)
    assert tracker.current_times[0] == pytest.approx(4.0)
    assert tracker.last_deltas[0] == pytest.approx(1.0)
    assert tracker.main_sector_delta(0) == pytest.approx(1.0)


def test_faster_mini_sector_improves_pb():
    tracker = MiniSectorTracker()
    run_lap(tracker, [3.0, 3.0])
    run_lap(tracker, [2.5, 3.5])

    assert tracker.best_times[0] == pytest.approx(2.5)
    assert tracker.best_times[1] == pytest.approx(3.0)
    assert tracker.last_deltas[0] == 0.0
    assert tracker.last_deltas[1] == pytest.approx(0.5)


def test_main_sector_delta_is_running_partial_sum():
    tracker = MiniSectorTracker()
    run_lap(tracker, [3.0, 3.0, 3.0])

    tracker.reset(0.0)
    tracker.update(0.0, 50.0, TRACK)
    tracker.update(4.0, 150.0, TRACK)
    assert tracker.main_sector_delta(0) == pytest.approx(1.0)

    tracker.update(8.0, 250.0, TRACK)
    assert tracker.main_sector_delta(0) == pytest.approx(2.0)

    tracker.update(12.0, 350.0, TRACK)
    assert tracker.main_sector_delta(0) == pytest.approx(3.0)
    assert tracker.main_sector_delta(1) == 0.0


def test_mini_sectors_of_second_sector_sum_into_second_main_delta():
    tracker = MiniSectorTracker()
    run_lap(tracker, [3.0] * 5)
    run_lap(tracker, [3.0, 3.0, 3.0, 3.5, 3.25])

    assert tracker.main_sector_delta(0) == pytest.approx(0.0)
    assert tracker.main_sector_delta(1) == pytest.approx(0.75)


def test_deltas_only_recomputed_on_mini_sector_change():
    tracker = MiniSectorTracker()
    tracker.reset(0.0)
    tracker._close = MagicMock(wraps=tracker._close)

    for i in range(10):
        tracker.update(0.1 * i, 5.0 * i, TRACK)
    assert tracker._close.call_count == 0

    tracker.update(3.0, 120.0, TRACK)
    assert tracker._close.call_count == 1


def test_non_positive_duration_is_ignored():
    tracker = MiniSectorTracker()
    tracker.update(5.0, 150.0, TRACK)
    tracker.update(5.0, 250.0, TRACK)

    assert tracker.best_times[1] is None
    assert tracker.current_times[1] == 0.0
    assert tracker.active_index == 2


def test_lap_clock_restart_closes_last_mini_sector_on_old_clock():
    tracker = MiniSectorTracker()
    tracker.update(80.0, 850.0, TRACK)
    tracker.update(89.5, 899.0, TRACK)
    tracker.update(0.5, 10.0, TRACK)

    assert tracker.best_times[8] == pytest.approx(9.5)
    assert tracker.active_index == 0
    assert tracker.active_start_time == 0.5


def test_index_clamped_to_last_mini_sector():
    tracker = MiniSectorTracker()
    tracker.update(1.0, TRACK - 1e-12, TRACK)
    assert tracker.active_index == MINI_SECTOR_COUNT - 1


# ---------------------------------------------------------------------------
# reset() / display_info()
# ---------------------------------------------------------------------------


def test_reset_clears_lap_state_but_keeps_bests():
    tracker = MiniSectorTracker()
    run_lap(tracker, [3.0])
    run_lap(tracker, [4.0])

    tracker.reset(0.25)

    assert tracker.current_times == [0.0] * MINI_SECTOR_COUNT
    assert tracker.last_deltas == [0.0] * MINI_SECTOR_COUNT
    assert tracker.main_sector_deltas == [0.0, 0.0, 0.0]
    assert tracker.active_index == 0
    assert tracker.active_start_time == 0.25
    assert tracker.best_times[0] == pytest.approx(3.0)


def test_display_info_covers_all_mini_sectors():
    tracker = MiniSectorTracker()
    run_lap(tracker, [3.0, 4.0])

    info = tracker.display_info()

    assert len(info) == MINI_SECTOR_COUNT
    assert all(isinstance(m, MiniSectorInfo) for m in info)
    assert info[1] == MiniSectorInfo(index=1, time=4.0, best=4.0, delta=0.0)
    assert info[5].best is None
