"""
Centralized configuration for the Compass Heading System.

This module provides all configuration constants and runtime settings for:
- Compass points and the direction window table
- Orientation fusion thresholds (free fall, weak geomagnetic field)
- Sensor sampling delays for real and mock sources
- Synthetic sensor generation (rotation rate, field strength, noise)
- OpenCV dashboard geometry
- Telemetry and logging

The Config class contains all constants as class attributes, making them
accessible throughout the application without instantiation.

Usage:
    from utils.config import Config

    points = Config.COMPASS_POINTS
    if Config.TELEMETRY_ENABLED:
        # Write headings.jsonl for the session
"""

import os


def _env_flag(name: str, default: bool) -> bool:
    """Read a boolean flag from the environment ("1", "true", "yes", "on")."""
    value = os.getenv(name)
    if value is None:
        return default
    return value.strip().lower() in ("1", "true", "yes", "on")


class Config:
    """System configuration constants for the Compass Heading System."""

    # ==========================================================================
    # COMPASS: Nominal bearings and labels
    # ==========================================================================

    # Bearing-ascending; windows are built from the midpoints between neighbours
    COMPASS_POINTS = (
        (0.0, "N"),
        (45.0, "NE"),
        (90.0, "E"),
        (135.0, "SE"),
        (180.0, "S"),
        (225.0, "SW"),
        (270.0, "W"),
        (315.0, "NW"),
    )
    FULL_CIRCLE_DEG = 360.0
    UNKNOWN_DIRECTION = "N/A"           # Only for a malformed table or NaN input

    # ==========================================================================
    # FUSION: Gravity / geomagnetic rotation matrix
    # ==========================================================================

    GRAVITY_EARTH = 9.80665             # m/s²
    FREE_FALL_GRAVITY_RATIO = 0.1       # |a| below 10% of g is free fall
    MIN_GEOMAGNETIC_NORM = 0.1          # |E x A| below this: field parallel to gravity

    # ==========================================================================
    # SENSORS: Sampling delays (seconds)
    # ==========================================================================

    SENSOR_DELAY_NORMAL = 0.2           # Sampling period of the mock source
    SENSOR_VECTOR_SIZE = 3

    # ==========================================================================
    # MOCK SOURCE: Synthetic generation
    # ==========================================================================

    SYNTHETIC_ROTATION_DEG_PER_S = 30.0         # Device yaw rate in synthetic mode
    SYNTHETIC_FIELD_UT = (0.0, 22.0, -42.0)     # East, North, Up components (μT)
    SYNTHETIC_ACCEL_NOISE = 0.02                # Std dev m/s²
    SYNTHETIC_MAG_NOISE = 0.3                   # Std dev μT
    SYNTHETIC_SEED = None

    # ==========================================================================
    # PRESENTATION: Dashboard geometry
    # ==========================================================================

    DASHBOARD_WINDOW_NAME = "Compass"
    DASHBOARD_WIDTH = 480
    DASHBOARD_HEIGHT = 560
    DASHBOARD_ROSE_RADIUS = 160
    DISPLAY_REFRESH_S = 0.05
    CONSOLE_PRINT_INTERVAL = 20         # Console display prints every N refreshes

    # ==========================================================================
    # TELEMETRY & LOGGING
    # ==========================================================================

    TELEMETRY_ENABLED = _env_flag("COMPASS_TELEMETRY", False)
    TELEMETRY_FLUSH_EVERY = 50          # Records buffered before a write
    LOG_DIR = "logs"
    LOG_LEVEL = os.getenv("COMPASS_LOG_LEVEL", "INFO").upper()
    LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

    # Debug mode stops after this many fused updates (0 = unlimited)
    DEBUG_MAX_SAMPLES = int(os.getenv("DEBUG_MAX_SAMPLES", "0") or 0)
