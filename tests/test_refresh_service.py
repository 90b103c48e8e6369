"""Tests for the QTimer-driven display refresh."""

import pytest
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from PySide6.QtCore import QCoreApplication

from src.data.log_store import LogStore
from src.data.table_renderers import CsvTableRenderer
from src.services.refresh_service import RefreshService
from src.services.session_timer import SessionTimer
from src.services.tracker_service import TrackerService


@pytest.fixture(scope="module")
def qapp():
    return QCoreApplication.instance() or QCoreApplication([])


@pytest.fixture
def tracker(tmp_path):
    clock = lambda: 1_700_000_000_000
    return TrackerService(
        SessionTimer("demo", clock=clock),
        LogStore(tmp_path, "demo", renderer=CsvTableRenderer()),
    )


class TestRefreshService:
    def test_start_pushes_display_text(self, qapp, tracker):
        seen = []
        svc = RefreshService(tracker, on_refresh=seen.append, interval_ms=250)
        tracker.start()
        svc.start()
        assert svc.active
        assert seen == ["00:00:00 (demo)"]
        svc.stop()
        assert not svc.active

    def test_set_interval(self, qapp, tracker):
        svc = RefreshService(tracker)
        svc.set_interval(500)
        assert svc.interval_ms == 500
        assert svc._timer.interval() == 500

    def test_no_callback_is_fine(self, qapp, tracker):
        svc = RefreshService(tracker)
        svc._refresh()
