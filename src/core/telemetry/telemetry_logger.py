"""Session telemetry: fused headings and system events as JSON lines."""

import json
import logging
import threading
import time
from dataclasses import asdict, dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, Dict, List, Optional

from core.compass.heading import Heading
from core.imu.orientation_fusion import OrientationAngles
from utils.config_sections import TelemetryConfig, load_telemetry_config

log = logging.getLogger(__name__)


@dataclass
class HeadingMetric:
    """One fused heading update."""
    timestamp: float
    sample_number: int
    azimuth_rad: float
    degrees: float
    direction: str
    pitch: Optional[float] = None
    roll: Optional[float] = None


class TelemetryLogger:
    """
    Session logger for compass headings (thread-safe).
    - headings.jsonl: every fused heading
    - system.jsonl: session start/end and other system events

    Heading records are buffered and written every `flush_every` records
    and on close().
    """

    def __init__(self, output_dir: Optional[Path] = None, config: Optional[TelemetryConfig] = None):
        """
        Start a new telemetry session.

        Args:
            output_dir: Base directory for sessions (default: Config.LOG_DIR)
            config: Telemetry section (default: from Config)
        """
        self.config = config or load_telemetry_config()

        self._write_lock = threading.Lock()
        self._buffer_lock = threading.Lock()

        base_dir = Path(output_dir) if output_dir is not None else Path(self.config.log_dir)
        base_dir.mkdir(parents=True, exist_ok=True)

        self.session_timestamp = datetime.now().strftime("%Y-%m-%d_%H-%M-%S")
        self.session_start = time.time()
        self.output_dir = base_dir / f"session_{self.session_timestamp}"
        self.output_dir.mkdir(parents=True, exist_ok=True)

        self.headings_log = self.output_dir / self.config.headings_file
        self.system_log = self.output_dir / self.config.system_file

        self.heading_buffer: List[HeadingMetric] = []
        self.sample_count = 0
        self.direction_counts: Dict[str, int] = {}
        self._closed = False

        self.log_system_event("session_start", {
            "session": self.session_timestamp,
            "timestamp": self.session_start,
        })

        log.info("[TELEMETRY] New session: %s", self.session_timestamp)
        log.info("[TELEMETRY] Folder: %s", self.output_dir)

    def get_session_dir(self) -> Path:
        """Return the session directory path."""
        return self.output_dir

    # ------------------------------------------------------------------
    # Heading Metrics
    # ------------------------------------------------------------------

    def log_heading(self, heading: Heading, orientation: Optional[OrientationAngles] = None) -> None:
        """
        Record one heading update.

        Thread-safe: may be called from sensor threads.
        """
        with self._buffer_lock:
            self.sample_count += 1
            self.direction_counts[heading.direction] = self.direction_counts.get(heading.direction, 0) + 1
            metric = HeadingMetric(
                timestamp=time.time(),
                sample_number=self.sample_count,
                azimuth_rad=heading.azimuth_rad,
                degrees=heading.degrees,
                direction=heading.direction,
                pitch=orientation.pitch if orientation is not None else None,
                roll=orientation.roll if orientation is not None else None,
            )
            self.heading_buffer.append(metric)
            should_flush = len(self.heading_buffer) >= self.config.flush_every

        if should_flush:
            self.flush()

    def flush(self) -> None:
        """Write buffered heading records."""
        with self._buffer_lock:
            pending = self.heading_buffer
            self.heading_buffer = []

        if pending:
            self._write_jsonl_many(self.headings_log, [asdict(metric) for metric in pending])

    # ------------------------------------------------------------------
    # System Events
    # ------------------------------------------------------------------

    def log_system_event(self, event: str, data: Optional[Dict[str, Any]] = None) -> None:
        """Record a system event immediately."""
        record = {"timestamp": time.time(), "event": event}
        if data:
            record.update(data)
        self._write_jsonl_many(self.system_log, [record])

    def get_summary(self) -> Dict[str, Any]:
        with self._buffer_lock:
            return {
                "session": self.session_timestamp,
                "duration_s": round(time.time() - self.session_start, 3),
                "samples": self.sample_count,
                "directions": dict(self.direction_counts),
            }

    def close(self) -> None:
        """Flush pending records and write the session summary."""
        if self._closed:
            return
        self.flush()
        self.log_system_event("session_end", self.get_summary())
        self._closed = True
        log.info("[TELEMETRY] Session closed (%d headings)", self.sample_count)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _write_jsonl_many(self, path: Path, records: List[Dict[str, Any]]) -> None:
        with self._write_lock:
            with open(path, "a", encoding="utf-8") as fh:
                for record in records:
                    fh.write(json.dumps(record) + "\n")
