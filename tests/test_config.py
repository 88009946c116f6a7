"""Tests for TimingConfig."""

from __future__ import annotations

import pytest

from forza_timing.config import TimingConfig

_VARS = (
    "FORZA_TIMING_MIN_DATAGRAM_LENGTH",
    "FORZA_TIMING_HISTORY_CAPACITY",
    "FORZA_TIMING_MIN_PROJECTION_SPEED",
    "FORZA_TIMING_QUEUE_MAXSIZE",
)


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    # setenv first so teardown also removes values written by load_dotenv
    for name in _VARS:
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)


def test_defaults():
    cfg = TimingConfig()
    assert cfg.min_datagram_length == 331
    assert cfg.history_capacity == 10
    assert cfg.min_projection_speed == 5.0
    assert cfg.queue_maxsize == 120


def test_from_env_without_variables_uses_defaults(tmp_path):
    assert TimingConfig.from_env(str(tmp_path / "missing.env")) == TimingConfig()


def test_from_env_reads_process_environment(monkeypatch, tmp_path):
    monkeypatch.setenv("FORZA_TIMING_HISTORY_CAPACITY", "5")
    monkeypatch.setenv("FORZA_TIMING_MIN_PROJECTION_SPEED", " 7.5 ")
    cfg = TimingConfig.from_env(str(tmp_path / "missing.env"))
    assert cfg.history_capacity == 5
    assert cfg.min_projection_speed == 7.5


def test_from_env_loads_dotenv_file(tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("FORZA_TIMING_QUEUE_MAXSIZE=30\n")
    cfg = TimingConfig.from_env(str(env_file))
    assert cfg.queue_maxsize == 30


def test_process_environment_wins_over_dotenv(monkeypatch, tmp_path):
    env_file = tmp_path / ".env"
    env_file.write_text("FORZA_TIMING_QUEUE_MAXSIZE=30\n")
    monkeypatch.setenv("FORZA_TIMING_QUEUE_MAXSIZE", "60")
    assert TimingConfig.from_env(str(env_file)).queue_maxsize == 60


def test_invalid_value_names_variable(monkeypatch, tmp_path):
    monkeypatch.setenv("FORZA_TIMING_HISTORY_CAPACITY", "ten")
    with pytest.raises(ValueError, match="FORZA_TIMING_HISTORY_CAPACITY"):
        TimingConfig.from_env(str(tmp_path / "missing.env"))
