"""
Sensor sink that turns accelerometer and magnetometer readings into headings.

Sources push readings through on_sensor_changed(); once both sensors have
reported at least once, every new reading re-runs the orientation fusion
and publishes a fresh Heading to listeners. Until then get_heading()
returns None and displays show "Initializing...".
"""

import logging
import threading
import time
from typing import Callable, Dict, List, Optional, Sequence

import numpy as np

from core.compass.direction_classifier import DirectionClassifier
from core.compass.heading import Heading, compute_heading
from core.imu.orientation_fusion import OrientationAngles, fuse_orientation
from core.telemetry.telemetry_logger import TelemetryLogger
from utils.config import Config
from utils.config_sections import FusionConfig, load_fusion_config

log = logging.getLogger(__name__)

SENSOR_ACCELEROMETER = "accelerometer"
SENSOR_MAGNETIC_FIELD = "magnetic_field"

HeadingListener = Callable[[Heading, OrientationAngles], None]


class CompassObserver:
    """
    Observer for accelerometer + magnetometer streams (thread-safe).
    """

    def __init__(
        self,
        classifier: Optional[DirectionClassifier] = None,
        telemetry: Optional[TelemetryLogger] = None,
        fusion_config: Optional[FusionConfig] = None,
    ) -> None:
        self.classifier = classifier
        self.telemetry = telemetry
        self.fusion_config = fusion_config or load_fusion_config()

        self._lock = threading.Lock()
        self.accelerometer_reading: Optional[np.ndarray] = None
        self.magnetometer_reading: Optional[np.ndarray] = None
        self.orientation: Optional[OrientationAngles] = None
        self.heading: Optional[Heading] = None
        self.last_timestamp_ns: Optional[int] = None

        self._listeners: List[HeadingListener] = []

        self.sample_counts: Dict[str, int] = {
            SENSOR_ACCELEROMETER: 0,
            SENSOR_MAGNETIC_FIELD: 0,
        }
        self.update_count = 0
        self.rejected_count = 0
        self.start_time = time.time()

        log.info("[OBSERVER] CompassObserver ready (accelerometer + magnetic field)")

    def add_listener(self, listener: HeadingListener) -> None:
        with self._lock:
            self._listeners.append(listener)

    def remove_listener(self, listener: HeadingListener) -> None:
        with self._lock:
            if listener in self._listeners:
                self._listeners.remove(listener)

    def on_sensor_changed(self, sensor_type: str, values: Sequence[float], timestamp_ns: Optional[int] = None) -> None:
        """
        Callback for new sensor readings.

        Args:
            sensor_type: SENSOR_ACCELEROMETER or SENSOR_MAGNETIC_FIELD
            values: Reading; only the first 3 components are used
            timestamp_ns: Capture timestamp (default: now)
        """
        if sensor_type not in self.sample_counts:
            log.debug("[OBSERVER] Ignoring sensor %r", sensor_type)
            return

        reading = np.array(values, dtype=np.float64).reshape(-1)
        if reading.shape[0] < Config.SENSOR_VECTOR_SIZE:
            raise ValueError(
                f"{sensor_type} reading needs {Config.SENSOR_VECTOR_SIZE} values, got {reading.shape[0]}"
            )
        reading = reading[:Config.SENSOR_VECTOR_SIZE].copy()

        with self._lock:
            if sensor_type == SENSOR_ACCELEROMETER:
                self.accelerometer_reading = reading
            else:
                self.magnetometer_reading = reading
            self.sample_counts[sensor_type] += 1
            self.last_timestamp_ns = timestamp_ns if timestamp_ns is not None else time.time_ns()

            accel = self.accelerometer_reading
            mag = self.magnetometer_reading

        if accel is None or mag is None:
            return

        self._update_orientation(accel, mag)

    def get_heading(self) -> Optional[Heading]:
        with self._lock:
            return self.heading

    def get_orientation(self) -> Optional[OrientationAngles]:
        with self._lock:
            return self.orientation

    def get_stats(self) -> Dict[str, float]:
        with self._lock:
            uptime = time.time() - self.start_time
            return {
                "accelerometer_samples": self.sample_counts[SENSOR_ACCELEROMETER],
                "magnetometer_samples": self.sample_counts[SENSOR_MAGNETIC_FIELD],
                "updates": self.update_count,
                "rejected": self.rejected_count,
                "update_rate": self.update_count / uptime if uptime > 0 else 0.0,
            }

    def _update_orientation(self, accel: np.ndarray, mag: np.ndarray) -> None:
        orientation = fuse_orientation(accel, mag, self.fusion_config)
        if orientation is None:
            with self._lock:
                self.rejected_count += 1
            log.debug("[OBSERVER] Degenerate readings, keeping previous heading")
            return

        heading = compute_heading(orientation.azimuth, self.classifier)

        with self._lock:
            self.orientation = orientation
            self.heading = heading
            self.update_count += 1
            listeners = list(self._listeners)
            update_count = self.update_count

        if self.telemetry is not None:
            self.telemetry.log_heading(heading, orientation)

        for listener in listeners:
            listener(heading, orientation)

        if update_count % 100 == 0:
            log.info("[OBSERVER] %d updates, %s", update_count, heading.describe())
