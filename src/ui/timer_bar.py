"""
Timer Bar — the small always-available window for the tracker.

Contains:
  - Live "HH:MM:SS (project)" readout
  - Start, Pause/Resume, Save and Open Folder buttons
"""

from __future__ import annotations

import logging
from typing import Optional

from PySide6.QtCore import Qt, QUrl, Slot
from PySide6.QtGui import QCloseEvent, QDesktopServices
from PySide6.QtWidgets import (
    QHBoxLayout, QLabel, QMainWindow, QMessageBox, QPushButton,
    QVBoxLayout, QWidget,
)

from src.errors import PersistenceWriteError
from src.services.refresh_service import RefreshService
from src.services.session_timer import TimerState
from src.services.tracker_service import TrackerService

logger = logging.getLogger(__name__)


class TimerBar(QMainWindow):
    """Start / pause / save controls bound to one TrackerService."""

    def __init__(
        self,
        tracker: TrackerService,
        refresh_interval_ms: int = 1000,
        open_folder_after_save: bool = True,
        commit_on_exit: bool = True,
        parent: Optional[QWidget] = None,
    ) -> None:
        super().__init__(parent)
        self.tracker = tracker
        self.open_folder_after_save = open_folder_after_save
        self.commit_on_exit = commit_on_exit

        self.setWindowTitle(f"Work Time Tracker - {tracker.project}")
        self.setMinimumWidth(460)

        self.refresh = RefreshService(
            tracker, on_refresh=self._on_refresh, interval_ms=refresh_interval_ms
        )

        self._build_ui()
        self._update_button_states()
        self._on_refresh(self.tracker.display_text())

    # ── UI Construction ─────────────────────────────────────────────────

    def _build_ui(self) -> None:
        central = QWidget()
        self.setCentralWidget(central)
        layout = QVBoxLayout(central)
        layout.setSpacing(12)
        layout.setContentsMargins(16, 16, 16, 16)

        self.state_label = QLabel("Ready")
        self.state_label.setObjectName("state_label")
        self.state_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        layout.addWidget(self.state_label)

        self.timer_label = QLabel("")
        self.timer_label.setObjectName("timer")
        self.timer_label.setAlignment(Qt.AlignmentFlag.AlignCenter)
        self.timer_label.setToolTip("Current work duration")
        layout.addWidget(self.timer_label)

        btn_layout = QHBoxLayout()
        btn_layout.setSpacing(8)

        self.btn_start = QPushButton("Start")
        self.btn_start.setObjectName("primary")
        self.btn_start.setToolTip("Start new timer")
        self.btn_start.clicked.connect(self._on_start)
        btn_layout.addWidget(self.btn_start)

        self.btn_pause = QPushButton("Pause")
        self.btn_pause.setToolTip("Pause/Resume timer")
        self.btn_pause.clicked.connect(self._on_pause_resume)
        btn_layout.addWidget(self.btn_pause)

        self.btn_save = QPushButton("Save")
        self.btn_save.setObjectName("danger")
        self.btn_save.setToolTip("Save and reset timer")
        self.btn_save.clicked.connect(self._on_save)
        btn_layout.addWidget(self.btn_save)

        self.btn_folder = QPushButton("Open Folder")
        self.btn_folder.clicked.connect(self._on_open_folder)
        btn_layout.addWidget(self.btn_folder)

        layout.addLayout(btn_layout)

    # ── Actions ─────────────────────────────────────────────────────────

    @Slot()
    def _on_start(self) -> None:
        self.tracker.start()
        self.refresh.start()
        self.statusBar().showMessage("Timer started", 3000)
        self._update_button_states()

    @Slot()
    def _on_pause_resume(self) -> None:
        state = self.tracker.pause_resume()
        if state == TimerState.PAUSED:
            self.statusBar().showMessage("Timer paused", 3000)
        elif state == TimerState.RUNNING:
            self.statusBar().showMessage("Timer resumed", 3000)
        self._update_button_states()
        self._on_refresh(self.tracker.display_text())

    @Slot()
    def _on_save(self) -> None:
        if self.tracker.state == TimerState.IDLE:
            return
        try:
            record = self.tracker.commit_and_restart()
        except PersistenceWriteError as exc:
            logger.error("Save failed: %s", exc)
            QMessageBox.critical(
                self, "Save Failed",
                f"Error saving work time:\n{exc}\n\n"
                "The session is kept and will be retried on the next save.",
            )
            return
        finally:
            self._update_button_states()

        self.statusBar().showMessage(
            f"Work time saved for project {record.project}: {record.duration}", 5000
        )
        if self.open_folder_after_save:
            self._on_open_folder()

    @Slot()
    def _on_open_folder(self) -> None:
        QDesktopServices.openUrl(QUrl.fromLocalFile(str(self.tracker.store.storage_dir)))

    # ── Display ─────────────────────────────────────────────────────────

    def _on_refresh(self, text: str) -> None:
        self.timer_label.setText(text)

    def _update_button_states(self) -> None:
        state = self.tracker.state
        idle = state == TimerState.IDLE
        paused = state == TimerState.PAUSED

        self.btn_start.setVisible(idle)
        self.btn_save.setVisible(not idle)
        self.btn_pause.setVisible(not idle)
        self.btn_pause.setText("Resume" if paused else "Pause")
        self.btn_pause.setObjectName("warning" if paused else "")
        self.btn_pause.style().unpolish(self.btn_pause)
        self.btn_pause.style().polish(self.btn_pause)

        labels = {
            TimerState.IDLE: "Ready",
            TimerState.RUNNING: "Working...",
            TimerState.PAUSED: "Paused",
        }
        self.state_label.setText(labels[state])

    # ── Shutdown ────────────────────────────────────────────────────────

    def closeEvent(self, event: QCloseEvent) -> None:
        self.refresh.stop()
        if self.commit_on_exit and self.tracker.state != TimerState.IDLE:
            logger.info("Saving running session on exit.")
            try:
                self.tracker.commit_and_stop()
            except PersistenceWriteError as exc:
                logger.error("Save on exit failed: %s", exc)
                QMessageBox.critical(self, "Save Failed", f"Error saving work time:\n{exc}")
        event.accept()
