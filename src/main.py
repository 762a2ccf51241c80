#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Compass Heading System

Reads accelerometer and magnetometer samples, fuses them into the device
orientation and shows the heading as degrees and an eight-point compass
direction.

Components:
- MockSensorSource: synthetic or recorded sensor readings
- CompassObserver: fusion + heading pipeline
- PresentationManager: OpenCV dashboard or console display
- TelemetryLogger: optional JSONL session log
"""

import logging
import time
from typing import Optional

from core.ctrl_handler import CtrlCHandler
from core.mock_sensors import MockSensorSource
from core.observer import CompassObserver
from core.telemetry.telemetry_logger import TelemetryLogger
from presentation.presentation_manager import PresentationManager
from utils.config import Config
from utils.logging_setup import configure_logging

log = logging.getLogger(__name__)


def main(
    mode: str = "synthetic",
    replay_path: Optional[str] = None,
    enable_dashboard: bool = False,
    max_samples: int = 0,
    enable_telemetry: Optional[bool] = None,
) -> int:
    """
    Run the compass until Ctrl+C, 'q' in the dashboard, the end of a
    non-looping replay or `max_samples` fused updates.

    Returns:
        int: Number of fused heading updates
    """
    configure_logging()

    print("=" * 60)
    print("Compass Heading System")
    print("=" * 60)

    ctrl_handler = CtrlCHandler()
    if enable_telemetry is None:
        enable_telemetry = Config.TELEMETRY_ENABLED

    telemetry = None
    source = None
    presentation = None
    observer = None

    try:
        if enable_telemetry:
            telemetry = TelemetryLogger()

        observer = CompassObserver(telemetry=telemetry)
        source = MockSensorSource(
            observer,
            mode=mode,
            replay_path=replay_path,
            loop=max_samples <= 0 and mode == "replay",
        )
        presentation = PresentationManager(enable_dashboard=enable_dashboard)

        source.start()
        log.info("[MAIN] Running (%s). Ctrl+C to stop", mode)

        while not ctrl_handler.should_stop:
            heading = observer.get_heading()
            if presentation.update_display(heading):
                log.info("[MAIN] Quit requested from dashboard")
                break

            if max_samples and observer.update_count >= max_samples:
                log.info("[MAIN] Reached %d updates", max_samples)
                break

            if source.finished:
                break

            time.sleep(Config.DISPLAY_REFRESH_S)

    finally:
        if source is not None:
            source.stop()
        if presentation is not None:
            presentation.cleanup()
        if telemetry is not None:
            telemetry.close()
        ctrl_handler.restore()

    if observer is None:
        return 0

    stats = observer.get_stats()
    log.info("[MAIN] Updates: %d, rejected: %d, %.1f Hz",
             stats["updates"], stats["rejected"], stats["update_rate"])
    return int(stats["updates"])


def main_debug() -> int:
    """Synthetic run with telemetry, bounded by DEBUG_MAX_SAMPLES (default 50)."""
    max_samples = Config.DEBUG_MAX_SAMPLES or 50
    return main(mode="synthetic", max_samples=max_samples, enable_telemetry=True)


if __name__ == "__main__":
    main()
