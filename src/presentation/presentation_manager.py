#!/usr/bin/env python3
# -*- coding: utf-8 -*-
"""
Presentation Manager - UI layer kept apart from the sensor pipeline

Responsibilities:
- Choosing the display (OpenCV dashboard or console)
- Refreshing it with the latest heading
- Keyboard input (q / ESC to quit)
"""

import logging
from dataclasses import dataclass
from typing import Optional

from core.compass.heading import Heading
from presentation.dashboards.opencv_dashboard import CompassDashboard
from utils.config import Config

log = logging.getLogger(__name__)

QUIT_KEYS = (ord('q'), 27)


@dataclass
class UIState:
    """User interface state"""
    dashboard_enabled: bool = False
    refresh_count: int = 0
    last_direction: Optional[str] = None


class PresentationManager:
    """
    Presentation and UI manager.

    With the dashboard enabled headings are drawn in an OpenCV window;
    otherwise they are logged to the console every few refreshes and
    whenever the direction changes.
    """

    def __init__(self, enable_dashboard: bool = False, dashboard: Optional[CompassDashboard] = None):
        self.ui_state = UIState(dashboard_enabled=enable_dashboard or dashboard is not None)
        self.dashboard = dashboard
        if self.ui_state.dashboard_enabled and self.dashboard is None:
            self.dashboard = CompassDashboard()

        log.info("[UI] PresentationManager ready (%s)",
                 "opencv" if self.ui_state.dashboard_enabled else "console")

    def update_display(self, heading: Optional[Heading]) -> bool:
        """
        Refresh the display.

        Returns:
            bool: True if the user asked to quit
        """
        self.ui_state.refresh_count += 1

        if self.dashboard is not None:
            key = self.dashboard.show(heading)
            return key in QUIT_KEYS

        self._console_display(heading)
        return False

    def _console_display(self, heading: Optional[Heading]) -> None:
        if heading is None:
            if self.ui_state.refresh_count % Config.CONSOLE_PRINT_INTERVAL == 1:
                log.info("[UI] Initializing...")
            return

        direction_changed = heading.direction != self.ui_state.last_direction
        self.ui_state.last_direction = heading.direction

        if direction_changed or self.ui_state.refresh_count % Config.CONSOLE_PRINT_INTERVAL == 0:
            log.info("[UI] %s", heading.describe())

    def cleanup(self) -> None:
        if self.dashboard is not None:
            self.dashboard.close()
        log.info("[UI] Presentation closed")
