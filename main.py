"""
Work Time Tracker — start/pause/save timer with daily work logs.
Entry point for the application.
"""

import faulthandler
import logging
import sys
from pathlib import Path

faulthandler.enable()

# Ensure src is importable
sys.path.insert(0, str(Path(__file__).resolve().parent))

from PySide6.QtWidgets import QApplication

from src.config import load_config, resolve_project_name
from src.data.log_store import LogStore
from src.data.table_renderers import get_renderer
from src.services.session_timer import SessionTimer
from src.services.tracker_service import TrackerService
from src.ui.styles import DARK_STYLESHEET
from src.ui.timer_bar import TimerBar


def setup_logging(storage_dir: Path) -> None:
    storage_dir.mkdir(parents=True, exist_ok=True)
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        handlers=[
            logging.StreamHandler(),
            logging.FileHandler(storage_dir / "worktime.log", encoding="utf-8"),
        ],
    )


def main() -> None:
    config = load_config()
    storage_dir = Path(config["storage_dir"]).expanduser()
    setup_logging(storage_dir)
    logger = logging.getLogger(__name__)

    project = resolve_project_name(config)
    logger.info("Starting Work Time Tracker for %s (storage: %s)", project, storage_dir)

    app = QApplication(sys.argv)
    app.setApplicationName("WorkTimeTracker")
    app.setOrganizationName("WorkTimeTracker")
    app.setStyleSheet(DARK_STYLESHEET)

    # One timer for the whole app, owned here and passed down
    timer = SessionTimer(
        project,
        date_format=config["date_format"],
        time_format=config["time_format"],
    )
    store = LogStore(
        storage_dir,
        project,
        renderer=get_renderer(config["table_format"]),
        date_format=config["date_format"],
    )
    tracker = TrackerService(timer, store)

    window = TimerBar(
        tracker,
        refresh_interval_ms=config["refresh_interval_ms"],
        open_folder_after_save=config["open_folder_after_save"],
        commit_on_exit=config["commit_on_exit"],
    )
    window.show()

    logger.info("Application started.")
    sys.exit(app.exec())


if __name__ == "__main__":
    main()


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   The composition root. Reads config, sets up logging, builds the one
#   SessionTimer, the LogStore and the TrackerService, and hands them to the
#   TimerBar window.
#
# Key points:
#   - No singletons: everything is constructed here and passed by reference.
#   - Logging goes to the console and to worktime.log next to the data, so a
#     failed save can be diagnosed after the fact.
#   - app.exec() runs the Qt event loop; the once-a-second display refresh
#     and every button click run on it, one at a time.
