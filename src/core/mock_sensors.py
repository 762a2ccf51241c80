#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Mock sensor source for compass testing without physical hardware.

This module feeds a CompassObserver with accelerometer and magnetometer
readings, either generated or replayed from a recording:
1. Synthetic: device lying flat, rotating about the vertical axis at a
   constant rate, with optional Gaussian sensor noise
2. Replay: CSV rows `timestamp_ns,sensor,x,y,z` replayed in order

Operating modes:
- 'synthetic': Generates gravity + rotated geomagnetic field readings
- 'replay': Replays a CSV recording (optionally in loop)

Usage:
    # Synthetic mode (default)
    source = MockSensorSource(observer, mode='synthetic')
    source.start()

    # Replay mode
    source = MockSensorSource(observer, mode='replay', replay_path='data/walk.csv')
"""

import csv
import logging
import math
import threading
import time
from pathlib import Path
from typing import List, Optional, Tuple

import numpy as np

from core.observer import SENSOR_ACCELEROMETER, SENSOR_MAGNETIC_FIELD, CompassObserver
from utils.config_sections import SensorSourceConfig, load_sensor_source_config

log = logging.getLogger("MockSensorSource")

VALID_SENSORS = (SENSOR_ACCELEROMETER, SENSOR_MAGNETIC_FIELD)

ReplayRow = Tuple[int, str, Tuple[float, float, float]]


def synthetic_readings(
    azimuth_rad: float,
    field_ut: Tuple[float, float, float],
    gravity: float = 9.80665,
) -> Tuple[np.ndarray, np.ndarray]:
    """
    Accelerometer and magnetometer readings of a flat device.

    Args:
        azimuth_rad: Direction the top of the device points to (0 = North)
        field_ut: Earth field (east, north, up) in μT
        gravity: Gravity magnitude in m/s²

    Returns:
        (accel, mag) vectors in device coordinates
    """
    east, north, up = field_ut
    sin_a, cos_a = math.sin(azimuth_rad), math.cos(azimuth_rad)

    # Device x points to bearing azimuth+90°, device y to bearing azimuth
    mag = np.array([
        east * cos_a - north * sin_a,
        east * sin_a + north * cos_a,
        up,
    ])
    accel = np.array([0.0, 0.0, gravity])
    return accel, mag


def load_replay_file(path: Path) -> List[ReplayRow]:
    """
    Parse a `timestamp_ns,sensor,x,y,z` CSV recording.

    Lines starting with '#' and a header row starting with 'timestamp'
    are skipped.

    Raises:
        ValueError: On a missing file or a malformed row
    """
    path = Path(path)
    if not path.exists():
        raise ValueError(f"Replay file not found: {path}")

    rows: List[ReplayRow] = []
    with open(path, newline="", encoding="utf-8") as fh:
        for line_no, row in enumerate(csv.reader(fh), start=1):
            if not row or row[0].startswith("#") or row[0].strip().lower() == "timestamp_ns":
                continue
            if len(row) < 5:
                raise ValueError(f"{path}:{line_no}: expected 5 columns, got {len(row)}")
            sensor = row[1].strip()
            if sensor not in VALID_SENSORS:
                raise ValueError(f"{path}:{line_no}: unknown sensor {sensor!r}")
            try:
                timestamp_ns = int(row[0])
                values = (float(row[2]), float(row[3]), float(row[4]))
            except ValueError as err:
                raise ValueError(f"{path}:{line_no}: {err}") from err
            rows.append((timestamp_ns, sensor, values))

    if not rows:
        raise ValueError(f"Replay file has no samples: {path}")
    return rows


class MockSensorSource:
    """
    Mock sensor source for compass development without hardware.

    See module docstring for usage examples.
    """

    def __init__(
        self,
        observer: CompassObserver,
        mode: str = 'synthetic',
        replay_path: Optional[str] = None,
        loop: bool = True,
        config: Optional[SensorSourceConfig] = None,
    ) -> None:
        """
        Initialize the MockSensorSource.

        Args:
            observer: Sink receiving the readings
            mode: 'synthetic' or 'replay'
            replay_path: CSV recording for 'replay' mode
            loop: Restart the recording when it ends (replay mode)
            config: Source parameters (default: from Config)
        """
        self.observer = observer
        self.mode = mode
        self.replay_path = replay_path
        self.loop = loop
        self.config = config or load_sensor_source_config()

        self.running = False
        self.sample_count = 0
        self.azimuth_rad = 0.0
        self._replay_rows: List[ReplayRow] = []
        self._replay_index = 0
        self._rng = np.random.default_rng(self.config.seed)
        self._stop_event = threading.Event()
        self._thread: Optional[threading.Thread] = None

        self._init_mode()

        log.info("[MOCK] Initialized in '%s' mode, %.0f ms per sample",
                 mode, self.config.sample_interval * 1000)

    def _init_mode(self) -> None:
        """Initialize resources based on selected mode."""
        if self.mode == 'replay':
            if not self.replay_path:
                raise ValueError("Replay mode needs a replay_path")
            self._replay_rows = load_replay_file(Path(self.replay_path))
            log.info("[MOCK] Loaded %d samples from %s", len(self._replay_rows), self.replay_path)
        elif self.mode != 'synthetic':
            raise ValueError(f"Unknown mode: {self.mode}")

    @property
    def finished(self) -> bool:
        """True once a non-looping replay has emitted every row."""
        return (
            self.mode == 'replay'
            and not self.loop
            and self._replay_index >= len(self._replay_rows)
        )

    def start(self) -> None:
        """Start emitting readings in a background thread."""
        if self.running:
            log.info("[MOCK] Already running")
            return

        self.running = True
        self._stop_event.clear()
        self._thread = threading.Thread(target=self._run, daemon=True)
        self._thread.start()
        log.info("[MOCK] Started sensor generation")

    def stop(self) -> None:
        """Stop the background thread."""
        if not self.running:
            return

        self.running = False
        self._stop_event.set()
        if self._thread is not None:
            self._thread.join(timeout=2.0)
            self._thread = None
        log.info("[MOCK] Stopped after %d samples", self.sample_count)

    def step(self, dt: Optional[float] = None) -> bool:
        """
        Emit one accelerometer + magnetometer pair synchronously.

        Args:
            dt: Simulated seconds since the previous step (synthetic mode)

        Returns:
            bool: False when a non-looping replay is exhausted
        """
        if self.mode == 'synthetic':
            self._step_synthetic(self.config.sample_interval if dt is None else dt)
            return True
        return self._step_replay()

    def _run(self) -> None:
        while not self._stop_event.is_set():
            if not self.step():
                log.info("[MOCK] Replay finished")
                self.running = False
                break
            self._stop_event.wait(self.config.sample_interval)

    def _step_synthetic(self, dt: float) -> None:
        self.azimuth_rad += math.radians(self.config.rotation_deg_per_s) * dt
        # Keep in (-π, π]
        self.azimuth_rad = math.atan2(math.sin(self.azimuth_rad), math.cos(self.azimuth_rad))

        accel, mag = synthetic_readings(self.azimuth_rad, self.config.field_ut)
        if self.config.accel_noise > 0:
            accel = accel + self._rng.normal(0.0, self.config.accel_noise, 3)
        if self.config.mag_noise > 0:
            mag = mag + self._rng.normal(0.0, self.config.mag_noise, 3)

        timestamp_ns = time.time_ns()
        self.observer.on_sensor_changed(SENSOR_ACCELEROMETER, accel, timestamp_ns)
        self.observer.on_sensor_changed(SENSOR_MAGNETIC_FIELD, mag, timestamp_ns)
        self.sample_count += 1

    def _step_replay(self) -> bool:
        if self._replay_index >= len(self._replay_rows):
            if not self.loop:
                return False
            self._replay_index = 0

        # Emit up to one reading per sensor so each step is one accel+mag pair
        seen = set()
        while self._replay_index < len(self._replay_rows):
            timestamp_ns, sensor, values = self._replay_rows[self._replay_index]
            if sensor in seen:
                break
            self.observer.on_sensor_changed(sensor, values, timestamp_ns)
            seen.add(sensor)
            self._replay_index += 1

        self.sample_count += 1
        return True
