"""Bounded end-to-end run of main() with the synthetic source."""

from __future__ import annotations

import json

import pytest

import main as main_module
from utils.config import Config


@pytest.fixture()
def fast_config(monkeypatch: pytest.MonkeyPatch, tmp_path):
    monkeypatch.setattr(Config, "SENSOR_DELAY_NORMAL", 0.001)
    monkeypatch.setattr(Config, "DISPLAY_REFRESH_S", 0.001)
    monkeypatch.setattr(Config, "LOG_DIR", str(tmp_path))
    return tmp_path


def test_main_synthetic_run_stops_after_max_samples(fast_config):
    updates = main_module.main(mode="synthetic", max_samples=5, enable_telemetry=False)
    assert updates >= 5


def test_main_writes_telemetry_session(fast_config):
    updates = main_module.main(mode="synthetic", max_samples=5, enable_telemetry=True)

    sessions = list(fast_config.glob("session_*"))
    assert len(sessions) == 1

    headings = [json.loads(line) for line in (sessions[0] / "headings.jsonl").read_text().splitlines()]
    assert len(headings) == updates
    assert {h["direction"] for h in headings} <= {"N", "NE", "E", "SE", "S", "SW", "W", "NW"}


def test_main_replay_ends_with_recording(fast_config):
    path = fast_config / "east.csv"
    path.write_text("1,accelerometer,0,0,9.81\n1,magnetic_field,-22,0,-42\n")

    updates = main_module.main(mode="replay", replay_path=str(path), max_samples=100, enable_telemetry=False)

    assert updates == 1
