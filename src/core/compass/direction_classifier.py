"""
Eight-point compass direction lookup.

Every compass point gets an angular window reaching halfway to each
neighbour. For E (90°) the neighbours are NE (45°) and SE (135°), so the
window is [67.5, 112.5]. N sits on the 0/360 seam and its window wraps:
[337.5, 360] together with [0, 22.5].

Boundaries are inclusive on both sides. A bearing exactly on a boundary
belongs to the cardinal point (N, E, S, W) of the two windows touching it,
which is achieved by scanning cardinal windows before intercardinal ones.

Usage:
    classifier = DirectionClassifier()
    classifier.classify(90.0)      # "E"
    classify_degrees(350.0)        # "N"
"""

import logging
from dataclasses import dataclass
from typing import Optional, Sequence, Tuple

from utils.config import Config

log = logging.getLogger(__name__)

COMPASS_POINTS: Tuple[Tuple[float, str], ...] = Config.COMPASS_POINTS
UNKNOWN_DIRECTION = Config.UNKNOWN_DIRECTION
FULL_CIRCLE_DEG = Config.FULL_CIRCLE_DEG
CARDINAL_STEP_DEG = 90.0


@dataclass(frozen=True)
class DirectionWindow:
    """Angular window assigned to one compass label."""
    label: str
    bearing: float  # Nominal bearing (0 = N)
    lower: float
    upper: float

    @property
    def wraps(self) -> bool:
        """True for the window crossing the 0/360 seam."""
        return self.lower > self.upper

    @property
    def width(self) -> float:
        if self.wraps:
            return FULL_CIRCLE_DEG - self.lower + self.upper
        return self.upper - self.lower

    @property
    def is_cardinal(self) -> bool:
        return self.bearing % CARDINAL_STEP_DEG == 0

    def contains(self, degrees: float) -> bool:
        if self.wraps:
            return degrees >= self.lower or degrees <= self.upper
        return self.lower <= degrees <= self.upper


def build_direction_windows(
    points: Sequence[Tuple[float, str]] = COMPASS_POINTS,
) -> Tuple[DirectionWindow, ...]:
    """
    Build the window table from bearing-ascending (bearing, label) pairs.

    Each boundary is the midpoint between a point and its successor; the
    successor of the last point is the first point one turn ahead, so the
    table closes on itself around the seam. Every boundary is computed
    once and shared by the two windows meeting there.

    Raises:
        ValueError: If the points are empty, unordered or produce a table
            that is not contiguous and exhaustive over [0, 360)
    """
    if len(points) < 2:
        raise ValueError("At least two compass points are required")

    bearings = [float(bearing) for bearing, _ in points]
    if any(b < 0 or b >= FULL_CIRCLE_DEG for b in bearings):
        raise ValueError(f"Bearings must lie in [0, 360): {bearings}")
    if any(later <= earlier for earlier, later in zip(bearings, bearings[1:])):
        raise ValueError(f"Bearings must be strictly ascending: {bearings}")

    successors = bearings[1:] + [bearings[0] + FULL_CIRCLE_DEG]
    boundaries = [((b + nxt) / 2) % FULL_CIRCLE_DEG for b, nxt in zip(bearings, successors)]

    table = tuple(
        DirectionWindow(label=label, bearing=bearings[i], lower=boundaries[i - 1], upper=boundaries[i])
        for i, (_, label) in enumerate(points)
    )
    validate_direction_windows(table)

    for window in table:
        log.debug("[COMPASS] Range %s: %.2f %.2f", window.label, window.lower, window.upper)

    return table


def validate_direction_windows(windows: Sequence[DirectionWindow]) -> None:
    """
    Check that windows are contiguous and cover the full circle once.

    Raises:
        ValueError: On a gap, an overlap or a total width other than 360
    """
    if not windows:
        raise ValueError("Direction window table is empty")

    for current, following in zip(windows, list(windows[1:]) + [windows[0]]):
        if current.upper != following.lower:
            raise ValueError(
                f"Windows {current.label} and {following.label} are not contiguous: "
                f"{current.upper} != {following.lower}"
            )

    total = sum(window.width for window in windows)
    if abs(total - FULL_CIRCLE_DEG) > 1e-9:
        raise ValueError(f"Direction windows cover {total} degrees instead of 360")

    wrapping = [window.label for window in windows if window.wraps]
    if len(wrapping) > 1:
        raise ValueError(f"Only one window may wrap the seam, got {wrapping}")


class DirectionClassifier:
    """Map a bearing in degrees to its compass label."""

    def __init__(self, windows: Optional[Sequence[DirectionWindow]] = None):
        self.windows: Tuple[DirectionWindow, ...] = (
            tuple(windows) if windows is not None else DIRECTION_WINDOWS
        )
        # Cardinal windows first so boundary ties resolve to N/E/S/W
        self._scan_order = tuple(
            sorted(self.windows, key=lambda w: (not w.is_cardinal, w.bearing))
        )

    @property
    def labels(self) -> Tuple[str, ...]:
        return tuple(window.label for window in self.windows)

    def window_for(self, degrees: float) -> Optional[DirectionWindow]:
        for window in self._scan_order:
            if window.contains(degrees):
                return window
        return None

    def classify(self, degrees: float) -> str:
        """
        Return the compass label for a bearing in [0, 360).

        Returns UNKNOWN_DIRECTION only when no window matches, which for
        a validated table means the input was NaN.
        """
        window = self.window_for(degrees)
        if window is None:
            log.warning("[COMPASS] No direction window for %r degrees", degrees)
            return UNKNOWN_DIRECTION
        return window.label


DIRECTION_WINDOWS = build_direction_windows(COMPASS_POINTS)
_default_classifier = DirectionClassifier(DIRECTION_WINDOWS)


def classify_degrees(degrees: float) -> str:
    """Classify with the shared default window table."""
    return _default_classifier.classify(degrees)


def get_default_classifier() -> DirectionClassifier:
    return _default_classifier
