"""
Raw log — append-only JSON history of every committed session.

Single responsibility: read the array, append one record, write it back.
Aggregation lives in the daily aggregator, not here.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import List

from src.data.models import SessionRecord
from src.errors import PersistenceWriteError

logger = logging.getLogger(__name__)

RAW_LOG_FILENAME = "work-logs.json"


class RawLogStore:
    """Read-modify-write store for work-logs.json."""

    def __init__(self, path: Path) -> None:
        self.path = Path(path)
        self._ensure_file_exists()

    def _ensure_file_exists(self) -> None:
        if not self.path.exists():
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text("[]", encoding="utf-8")
            logger.info("Created raw log at %s", self.path)

    def _read_entries(self) -> list:
        try:
            entries = json.loads(self.path.read_text(encoding="utf-8"))
        except FileNotFoundError:
            return []
        except (OSError, json.JSONDecodeError) as exc:
            raise PersistenceWriteError(
                f"Cannot read raw log {self.path}: {exc}", path=self.path
            ) from exc
        if not isinstance(entries, list):
            raise PersistenceWriteError(
                f"Raw log {self.path} is not a JSON array", path=self.path
            )
        return entries

    def load(self) -> List[SessionRecord]:
        """Every record in the log, oldest first. Unreadable entries are skipped."""
        records: List[SessionRecord] = []
        for entry in self._read_entries():
            try:
                records.append(SessionRecord.from_dict(entry))
            except (KeyError, TypeError, ValueError):
                logger.warning("Skipping malformed raw log entry: %r", entry)
        return records

    def append(self, record: SessionRecord) -> None:
        # keep foreign entries untouched, only add ours
        entries = self._read_entries()
        entries.append(record.to_dict())
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            self.path.write_text(json.dumps(entries, indent=2), encoding="utf-8")
        except OSError as exc:
            logger.exception("Error saving to JSON")
            raise PersistenceWriteError(
                f"Cannot write raw log {self.path}: {exc}",
                record=record, path=self.path,
            ) from exc
        logger.info("Appended session to %s (%d entries)", self.path.name, len(entries))
