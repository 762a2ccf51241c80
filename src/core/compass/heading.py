"""Azimuth (radians) to heading (degrees + compass label)."""

from dataclasses import dataclass
from typing import Optional

from core.compass.angle_normalizer import normalize_azimuth
from core.compass.direction_classifier import DirectionClassifier, get_default_classifier


@dataclass(frozen=True)
class Heading:
    """Compass heading derived from one fused orientation sample."""
    azimuth_rad: float
    degrees: float      # [0, 360), 0 = North
    direction: str      # N, NE, E, SE, S, SW, W, NW

    def describe(self) -> str:
        return f"Azimuthal: {self.degrees:.1f}° {self.direction}"


def compute_heading(
    azimuth_rad: float,
    classifier: Optional[DirectionClassifier] = None,
) -> Heading:
    """
    Normalize an azimuth and classify it.

    Args:
        azimuth_rad: Azimuth in (-π, π] from the orientation fusion
        classifier: Classifier to use (default: shared 8-point table)

    Returns:
        Heading with the normalized degrees and the direction label
    """
    classifier = classifier or get_default_classifier()
    degrees = normalize_azimuth(azimuth_rad)
    return Heading(
        azimuth_rad=float(azimuth_rad),
        degrees=degrees,
        direction=classifier.classify(degrees),
    )


def direction_for_azimuth(azimuth_rad: float) -> str:
    """Compass label for an azimuth in radians."""
    return compute_heading(azimuth_rad).direction
