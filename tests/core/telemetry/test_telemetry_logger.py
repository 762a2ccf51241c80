"""Tests for the JSONL heading telemetry session."""

from __future__ import annotations

import json

from core.compass.heading import compute_heading
from core.imu.orientation_fusion import OrientationAngles
from core.telemetry.telemetry_logger import TelemetryLogger
from utils.config_sections import TelemetryConfig


def read_jsonl(path):
    return [json.loads(line) for line in path.read_text().splitlines() if line]


def test_session_directory_and_start_event(tmp_path):
    telemetry = TelemetryLogger(output_dir=tmp_path, config=TelemetryConfig(flush_every=10))

    session_dir = telemetry.get_session_dir()
    assert session_dir.parent == tmp_path
    assert session_dir.name.startswith("session_")

    events = read_jsonl(telemetry.system_log)
    assert events[0]["event"] == "session_start"


def test_headings_are_buffered_until_flush(tmp_path):
    telemetry = TelemetryLogger(output_dir=tmp_path, config=TelemetryConfig(flush_every=3))
    orientation = OrientationAngles(azimuth=1.5708, pitch=0.1, roll=-0.2)

    telemetry.log_heading(compute_heading(1.5708), orientation)
    telemetry.log_heading(compute_heading(-1.5708))
    assert not telemetry.headings_log.exists()

    telemetry.log_heading(compute_heading(3.14159))
    records = read_jsonl(telemetry.headings_log)

    assert [r["direction"] for r in records] == ["E", "W", "S"]
    assert [r["sample_number"] for r in records] == [1, 2, 3]
    assert records[0]["pitch"] == 0.1
    assert records[1]["roll"] is None


def test_close_flushes_and_writes_summary(tmp_path):
    telemetry = TelemetryLogger(output_dir=tmp_path, config=TelemetryConfig(flush_every=100))
    telemetry.log_heading(compute_heading(0.0))
    telemetry.log_heading(compute_heading(0.1))
    telemetry.log_heading(compute_heading(1.5708))

    telemetry.close()
    telemetry.close()

    assert len(read_jsonl(telemetry.headings_log)) == 3
    events = read_jsonl(telemetry.system_log)
    assert [e["event"] for e in events] == ["session_start", "session_end"]
    assert events[-1]["samples"] == 3
    assert events[-1]["directions"] == {"N": 2, "E": 1}
