"""
Orientation from gravity and geomagnetic vectors.

Implements the standard rotation-matrix construction used by mobile
sensor frameworks: the east axis is the cross product of the magnetic
field and gravity, north is gravity crossed with east, and up is the
normalized gravity vector. Azimuth, pitch and roll are then read from the
matrix.

Device axes: x to the right of the screen, y to the top, z out of the
screen. With the device lying flat and its top pointing north, the
azimuth is 0.

Usage:
    angles = fuse_orientation(accel, mag)
    if angles is not None:
        print(angles.azimuth)
"""

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from utils.config_sections import FusionConfig, load_fusion_config


@dataclass(frozen=True)
class OrientationAngles:
    """Device orientation in radians."""
    azimuth: float  # Rotation about -z, (-π, π], 0 = North
    pitch: float    # Rotation about x, [-π/2, π/2]
    roll: float     # Rotation about y, (-π, π]


def _as_vector(values: Sequence[float], name: str) -> np.ndarray:
    vector = np.asarray(values, dtype=np.float64).reshape(-1)
    if vector.shape[0] < 3:
        raise ValueError(f"{name} needs 3 components, got {vector.shape[0]}")
    return vector[:3]


def get_rotation_matrix(
    gravity: Sequence[float],
    geomagnetic: Sequence[float],
    config: Optional[FusionConfig] = None,
) -> Optional[np.ndarray]:
    """
    Compute the 3x3 rotation matrix from device to world coordinates.

    Args:
        gravity: Accelerometer reading [ax, ay, az] in m/s²
        geomagnetic: Magnetometer reading [mx, my, mz] in μT
        config: Fusion thresholds (default: from Config)

    Returns:
        np.ndarray (3, 3) with rows east, north, up; None when the device
        is in free fall or the field is (nearly) parallel to gravity
    """
    config = config or load_fusion_config()
    a = _as_vector(gravity, "gravity")
    e = _as_vector(geomagnetic, "geomagnetic")

    norm_sq_a = float(np.dot(a, a))
    free_fall_sq = (config.free_fall_ratio * config.gravity) ** 2
    if norm_sq_a < free_fall_sq:
        return None

    h = np.cross(e, a)
    norm_h = float(np.linalg.norm(h))
    if norm_h < config.min_geomagnetic_norm:
        return None

    h /= norm_h
    a = a / np.sqrt(norm_sq_a)
    m = np.cross(a, h)

    return np.vstack((h, m, a))


def get_orientation(rotation: np.ndarray) -> OrientationAngles:
    """Extract azimuth, pitch and roll from a rotation matrix."""
    r = np.asarray(rotation, dtype=np.float64).reshape(3, 3)
    azimuth = float(np.arctan2(r[0, 1], r[1, 1]))
    pitch = float(np.arcsin(np.clip(-r[2, 1], -1.0, 1.0)))
    roll = float(np.arctan2(-r[2, 0], r[2, 2]))
    return OrientationAngles(azimuth=azimuth, pitch=pitch, roll=roll)


def fuse_orientation(
    gravity: Sequence[float],
    geomagnetic: Sequence[float],
    config: Optional[FusionConfig] = None,
) -> Optional[OrientationAngles]:
    """Rotation matrix + orientation in one call; None if degenerate."""
    rotation = get_rotation_matrix(gravity, geomagnetic, config)
    if rotation is None:
        return None
    return get_orientation(rotation)
