"""
Azimuth normalization from signed radians to compass degrees.

The fusion routine reports azimuth as the rotation about the -z axis:
0 when facing north, π/2 facing east, -π/2 facing west and ±π facing
south, with values in (-π, π]. Compass display and direction lookup work
on an unsigned bearing in [0, 360), so negative azimuths are moved into
the upper half of the circle:

    radians:  0 -> π/2 -> π | -π -> -π/2 -> 0
    degrees:  0 ->  90 -> 180 | 180 -> 270 -> 360

Usage:
    degrees = normalize_azimuth(-math.pi / 2)   # 270.0
"""

import math

HALF_CIRCLE_DEG = 180.0
FULL_CIRCLE_DEG = 360.0


def normalize_azimuth(azimuth_rad: float) -> float:
    """
    Convert an azimuth in (-π, π] radians to degrees in [0, 360).

    Inputs outside (-π, π] are not rejected; the same linear mapping is
    applied and the result simply falls outside [0, 360).

    Args:
        azimuth_rad: Azimuth in radians from the orientation fusion

    Returns:
        float: Bearing in degrees, 0 = north, clockwise
    """
    if azimuth_rad < 0:
        degrees = (math.pi + azimuth_rad) / math.pi * HALF_CIRCLE_DEG + HALF_CIRCLE_DEG
        # Tiny negative azimuths round up to exactly 360, which is north
        if degrees == FULL_CIRCLE_DEG:
            return 0.0
        return degrees

    return azimuth_rad / math.pi * HALF_CIRCLE_DEG
