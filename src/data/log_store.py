"""
Log Store — the two files a project's work time is written to.

    <storage_dir>/work-logs.json       raw, append-only session history
    <storage_dir>/<project>.<ext>      per-day summary table

Both are updated on every save, raw log first. There is no transaction
across the two: if the summary write fails after the raw log succeeded, the
raised PersistenceWriteError says so and rebuild_table() can re-derive the
summary from the raw log later.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from pathlib import Path
from typing import List, Optional

from src.data.models import DEFAULT_DATE_FORMAT, DailyRecord, SessionRecord
from src.data.raw_log import RAW_LOG_FILENAME, RawLogStore
from src.data.table_renderers import TableRenderer, XlsxTableRenderer
from src.errors import PersistenceWriteError
from src.services import daily_aggregator

logger = logging.getLogger(__name__)

UNKNOWN_PROJECT = "unknown-project"


def safe_filename(name: str) -> str:
    """Project names become file names; strip path separators and the like."""
    cleaned = re.sub(r'[\\/:*?"<>|\x00-\x1f]+', "_", name or "").strip(" .")
    return cleaned or UNKNOWN_PROJECT


class LogStore:
    """Owns the raw log and the daily table for one project."""

    def __init__(
        self,
        storage_dir: Path,
        project: str,
        renderer: Optional[TableRenderer] = None,
        date_format: str = DEFAULT_DATE_FORMAT,
    ) -> None:
        self.storage_dir = Path(storage_dir)
        self.storage_dir.mkdir(parents=True, exist_ok=True)
        self.project = project
        self.renderer = renderer or XlsxTableRenderer()
        self.date_format = date_format

        self.raw_log = RawLogStore(self.storage_dir / RAW_LOG_FILENAME)
        self.table_path = self.storage_dir / f"{safe_filename(project)}.{self.renderer.extension}"

    # ── Saving ──────────────────────────────────────────────────────────────

    def save(self, record: SessionRecord, raw_log: bool = True, table: bool = True) -> None:
        """
        Persist one committed session to both views.

        raw_log/table let a retry skip a view that already made it to disk.
        """
        raw_saved = not raw_log
        if raw_log:
            try:
                self.raw_log.append(record)
            except PersistenceWriteError as exc:
                raise PersistenceWriteError(
                    str(exc), record=record, path=self.raw_log.path,
                    raw_log_saved=False, table_saved=False,
                ) from exc
            raw_saved = True

        if table:
            try:
                self.write_table(daily_aggregator.apply(
                    record, self.daily_table(), self.date_format,
                ))
            except Exception as exc:
                logger.exception("Error saving summary table %s", self.table_path)
                raise PersistenceWriteError(
                    f"Cannot write summary table {self.table_path}: {exc}",
                    record=record, path=self.table_path,
                    raw_log_saved=raw_saved, table_saved=False,
                ) from exc

        logger.info("Saved %s (%s) for %s", record.duration, record.date, record.project)

    def write_table(self, table: List[DailyRecord]) -> None:
        self.renderer.write(self.table_path, table, datetime.now())

    # ── Reading ─────────────────────────────────────────────────────────────

    def daily_table(self) -> List[DailyRecord]:
        return self.renderer.load(self.table_path)

    def sessions(self, project_only: bool = True) -> List[SessionRecord]:
        """Raw log records, by default only those of this store's project."""
        records = self.raw_log.load()
        if project_only:
            records = [r for r in records if r.project == self.project]
        return records

    def rebuild_table(self) -> List[DailyRecord]:
        """Re-derive the summary from this project's raw log and overwrite it."""
        table: List[DailyRecord] = []
        records = self.sessions()
        for record in records:
            table = daily_aggregator.apply(record, table, self.date_format)
        try:
            self.write_table(table)
        except Exception as exc:
            raise PersistenceWriteError(
                f"Cannot write summary table {self.table_path}: {exc}",
                path=self.table_path, raw_log_saved=True,
            ) from exc
        logger.info("Rebuilt %s from %d sessions", self.table_path.name, len(records))
        return table


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   The persistence facade the tracker talks to. One call, save(record),
#   appends to the raw JSON log and re-renders the per-day table.
#
# Key design decisions:
#   - Raw log first: it is the history we can rebuild everything else from.
#   - The summary table is read back from its own file, aggregated, and
#     rewritten whole.
#   - Renderer is injected: xlsx for humans, csv/json for scripts.
#
# Interviewer-friendly talking points:
#   1. Dual writes without a transaction are a known trade-off for a local
#      single-user tool; the exception reports exactly which half failed.
#   2. rebuild_table() is the repair path when the two views diverge.
