"""
Refresh Service — periodic live-display updates while a session runs.

Uses a QTimer, so the callback runs on the Qt event loop: the same thread
as button clicks and commits, never concurrently with them.
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from PySide6.QtCore import QTimer

from src.services.tracker_service import TrackerService

logger = logging.getLogger(__name__)

DEFAULT_REFRESH_INTERVAL_MS = 1000


class RefreshService:
    """Calls on_refresh(display_text) every interval while running."""

    def __init__(
        self,
        tracker: TrackerService,
        on_refresh: Optional[Callable[[str], None]] = None,
        interval_ms: int = DEFAULT_REFRESH_INTERVAL_MS,
    ) -> None:
        self.tracker = tracker
        self.on_refresh = on_refresh
        self.interval_ms = interval_ms

        self._timer = QTimer()
        self._timer.setInterval(self.interval_ms)
        self._timer.timeout.connect(self._refresh)

    @property
    def active(self) -> bool:
        return self._timer.isActive()

    def start(self) -> None:
        self._timer.start()
        self._refresh()
        logger.info("Display refresh started: every %d ms", self.interval_ms)

    def stop(self) -> None:
        self._timer.stop()

    def set_interval(self, interval_ms: int) -> None:
        self.interval_ms = interval_ms
        self._timer.setInterval(interval_ms)

    def _refresh(self) -> None:
        if self.on_refresh:
            self.on_refresh(self.tracker.display_text())
