"""
Tracker Service — the three actions the UI binds to, plus the live readout.

Owns the SessionTimer and the LogStore and sequences them: commit the
timer, then save. A save that fails keeps the record in `unsaved` so it can
be retried instead of disappearing.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import List, Optional

from src.data.log_store import LogStore
from src.data.models import SessionRecord
from src.errors import PersistenceWriteError
from src.services.duration import encode
from src.services.session_timer import SessionTimer, TimerState

logger = logging.getLogger(__name__)


@dataclass
class UnsavedSession:
    """A committed record still missing from one or both views."""
    record: SessionRecord
    raw_log_saved: bool = False
    table_saved: bool = False


class TrackerService:
    """Start / pause-resume / commit-and-restart for one project."""

    def __init__(self, timer: SessionTimer, store: LogStore) -> None:
        self.timer = timer
        self.store = store
        self.unsaved: List[UnsavedSession] = []

    @property
    def project(self) -> str:
        return self.timer.project

    @property
    def state(self) -> str:
        return self.timer.state

    # ── Public API ──────────────────────────────────────────────────────────

    def start(self) -> None:
        self.timer.start()

    def pause_resume(self) -> Optional[str]:
        """
        Toggle pause. Returns the new state, or None when nothing is running
        (the toggle is ignored then, it does not raise).
        """
        state = self.timer.state
        if state == TimerState.IDLE:
            logger.info("Pause/resume ignored: timer is not running.")
            return None
        if state == TimerState.PAUSED:
            self.timer.resume()
        else:
            self.timer.pause()
        return self.timer.state

    def commit_and_restart(self) -> SessionRecord:
        """
        Book the current session and immediately start a new one.

        Sessions still waiting from an earlier failed save are written first,
        so both files keep commit order. Raises PersistenceWriteError if
        anything could not be written; the timer has already restarted by
        then and the record sits in self.unsaved.
        """
        return self._commit(restart=True)

    def commit_and_stop(self) -> SessionRecord:
        """Book the current session and leave the timer idle (used on exit)."""
        return self._commit(restart=False)

    def current_elapsed(self) -> int:
        return self.timer.elapsed()

    def display_text(self) -> str:
        return f"{encode(self.current_elapsed())} ({self.project})"

    def retry_unsaved(self) -> int:
        """Re-attempt every failed save. Returns how many are still unsaved."""
        pending, self.unsaved = self.unsaved, []
        for i, item in enumerate(pending):
            try:
                self._save(item)
            except PersistenceWriteError:
                # _save re-queued this one; keep the rest queued as they were
                self.unsaved.extend(pending[i + 1:])
                raise
        return len(self.unsaved)

    # ── Internals ───────────────────────────────────────────────────────────

    def _commit(self, restart: bool) -> SessionRecord:
        item = UnsavedSession(self.timer.commit(restart=restart))
        if self.unsaved:
            try:
                self.retry_unsaved()
            except PersistenceWriteError:
                # an older session is still stuck; this one waits behind it
                self.unsaved.append(item)
                raise
        self._save(item)
        return item.record

    def _save(self, item: UnsavedSession) -> None:
        try:
            self.store.save(
                item.record,
                raw_log=not item.raw_log_saved,
                table=not item.table_saved,
            )
        except PersistenceWriteError as exc:
            item.raw_log_saved = item.raw_log_saved or exc.raw_log_saved
            item.table_saved = item.table_saved or exc.table_saved
            self.unsaved.append(item)
            logger.error(
                "Session %s - %s on %s not fully saved (raw log: %s, table: %s)",
                item.record.start_time, item.record.end_time, item.record.date,
                item.raw_log_saved, item.table_saved,
            )
            raise
