import math
import time
from typing import Optional, Tuple

import cv2
import numpy as np

from core.compass.direction_classifier import DIRECTION_WINDOWS
from core.compass.heading import Heading
from utils.config_sections import DashboardConfig, load_dashboard_config

WHITE = (255, 255, 255)
GREY = (128, 128, 128)
RED = (0, 0, 255)
GREEN = (0, 255, 0)


class CompassDashboard:
    """
    OpenCV compass in a single window.

    Layout (top to bottom):
      Azimuthal: <degrees>
      <direction label>
      compass rose with needle
    """

    def __init__(self, config: Optional[DashboardConfig] = None, create_window: bool = True):
        self.config = config or load_dashboard_config()
        self.width = int(self.config.width)
        self.height = int(self.config.height)
        self.window_name = self.config.window_name
        self.start_time = time.time()
        self.frames_rendered = 0
        self.window_created = False

        if create_window:
            cv2.namedWindow(self.window_name, cv2.WINDOW_NORMAL)
            cv2.resizeWindow(self.window_name, self.width, self.height)
            self.window_created = True

        print("[DASHBOARD] OpenCV compass dashboard ready")

    def render(self, heading: Optional[Heading]) -> np.ndarray:
        """Draw the current heading (or the initializing screen) on a new canvas."""
        canvas = np.zeros((self.height, self.width, 3), dtype=np.uint8)
        self.frames_rendered += 1

        if heading is None:
            cv2.putText(canvas, "Initializing...", (20, self.height // 2),
                        cv2.FONT_HERSHEY_SIMPLEX, 1.0, WHITE, 2)
            return canvas

        cv2.putText(canvas, f"Azimuthal: {heading.degrees:.1f}", (20, 50),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.9, WHITE, 2)

        label_size, _ = cv2.getTextSize(heading.direction, cv2.FONT_HERSHEY_DUPLEX, 1.8, 4)
        label_x = max(0, (self.width - label_size[0]) // 2)
        cv2.putText(canvas, heading.direction, (label_x, 120),
                    cv2.FONT_HERSHEY_DUPLEX, 1.8, GREEN, 4)

        self._draw_rose(canvas, heading)
        return canvas

    def show(self, heading: Optional[Heading]) -> int:
        """Render and display; returns the pressed key (-1 if none)."""
        canvas = self.render(heading)
        cv2.imshow(self.window_name, canvas)
        return cv2.waitKey(1) & 0xFF

    def close(self) -> None:
        if self.window_created:
            cv2.destroyWindow(self.window_name)
            self.window_created = False

    def _rose_center(self) -> Tuple[int, int]:
        return self.width // 2, 140 + (self.height - 140) // 2

    def _draw_rose(self, canvas: np.ndarray, heading: Heading) -> None:
        cx, cy = self._rose_center()
        radius = min(int(self.config.rose_radius), (self.height - 160) // 2, self.width // 2 - 10)

        cv2.circle(canvas, (cx, cy), radius, GREY, 2)

        for window in DIRECTION_WINDOWS:
            x, y = self._polar(cx, cy, radius - 25, window.bearing)
            scale = 0.7 if window.is_cardinal else 0.45
            (tw, th), _ = cv2.getTextSize(window.label, cv2.FONT_HERSHEY_SIMPLEX, scale, 1)
            color = GREEN if window.label == heading.direction else WHITE
            cv2.putText(canvas, window.label, (x - tw // 2, y + th // 2),
                        cv2.FONT_HERSHEY_SIMPLEX, scale, color, 1)

            # Window boundary tick
            inner = self._polar(cx, cy, radius - 8, window.lower)
            outer = self._polar(cx, cy, radius, window.lower)
            cv2.line(canvas, inner, outer, GREY, 1)

        tip = self._polar(cx, cy, radius - 45, heading.degrees)
        cv2.arrowedLine(canvas, (cx, cy), tip, RED, 3, tipLength=0.15)

    @staticmethod
    def _polar(cx: int, cy: int, radius: float, bearing_deg: float) -> Tuple[int, int]:
        """Screen point for a compass bearing (0 = up, clockwise)."""
        theta = math.radians(bearing_deg)
        return int(round(cx + radius * math.sin(theta))), int(round(cy - radius * math.cos(theta)))
