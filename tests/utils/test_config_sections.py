"""Config section loaders read Config at call time."""

from __future__ import annotations

import pytest

from utils.config import Config
from utils.config_sections import (
    load_dashboard_config,
    load_fusion_config,
    load_sensor_source_config,
    load_telemetry_config,
)


def test_loaders_follow_config(monkeypatch: pytest.MonkeyPatch):
    monkeypatch.setattr(Config, "SENSOR_DELAY_NORMAL", 0.5)
    monkeypatch.setattr(Config, "SYNTHETIC_FIELD_UT", [1.0, 2.0, 3.0])
    monkeypatch.setattr(Config, "DASHBOARD_WIDTH", 640)
    monkeypatch.setattr(Config, "TELEMETRY_FLUSH_EVERY", 7)
    monkeypatch.setattr(Config, "MIN_GEOMAGNETIC_NORM", 0.5)

    assert load_sensor_source_config().sample_interval == 0.5
    assert load_sensor_source_config().field_ut == (1.0, 2.0, 3.0)
    assert load_dashboard_config().width == 640
    assert load_telemetry_config().flush_every == 7
    assert load_fusion_config().min_geomagnetic_norm == 0.5


def test_compass_points_are_bearing_ascending():
    bearings = [bearing for bearing, _ in Config.COMPASS_POINTS]
    assert bearings == sorted(bearings)
    assert [label for _, label in Config.COMPASS_POINTS] == ["N", "NE", "E", "SE", "S", "SW", "W", "NW"]
