"""
Data models for the work time tracker.

Plain dataclasses for the two things that get persisted: one committed
session (SessionRecord) and one row of the per-day summary (DailyRecord).
The dict keys used on disk are kept apart from the Python attribute names so
existing work-logs.json files stay readable.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List

from src.services.duration import encode

DEFAULT_DATE_FORMAT = "%d/%m/%Y"
DEFAULT_TIME_FORMAT = "%H:%M:%S"

# Column headers of the daily summary table, in order.
TABLE_HEADERS = ("Date", "Total Duration", "Work Sessions")


@dataclass(frozen=True)
class SessionRecord:
    """One committed session, from start (or last commit) to commit."""
    date: str
    start_time: str
    end_time: str
    project: str
    total_duration_ms: int

    def __post_init__(self) -> None:
        if self.total_duration_ms < 0:
            raise ValueError("total_duration_ms must be >= 0")

    @property
    def duration(self) -> str:
        return encode(self.total_duration_ms)

    @property
    def time_range(self) -> str:
        return f"{self.start_time} - {self.end_time}"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "date": self.date,
            "duration": self.duration,
            "startTime": self.start_time,
            "endTime": self.end_time,
            "project": self.project,
            "totalDurationMs": self.total_duration_ms,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SessionRecord":
        # totalDurationMs is authoritative; "duration" is re-derived from it
        return cls(
            date=str(data["date"]),
            start_time=str(data["startTime"]),
            end_time=str(data["endTime"]),
            project=str(data.get("project", "")),
            total_duration_ms=int(data["totalDurationMs"]),
        )


@dataclass
class DailyRecord:
    """Aggregate of every session committed on one calendar date."""
    date: str
    total_duration: str = "00:00:00"
    work_sessions: List[str] = field(default_factory=list)

    def to_row(self) -> Dict[str, str]:
        return {
            "Date": self.date,
            "Total Duration": self.total_duration,
            "Work Sessions": "\n".join(self.work_sessions),
        }

    @classmethod
    def from_row(cls, row: Dict[str, Any]) -> "DailyRecord":
        sessions = row.get("Work Sessions") or ""
        return cls(
            date=str(row.get("Date") or ""),
            total_duration=str(row.get("Total Duration") or ""),
            work_sessions=[s for s in str(sessions).split("\n") if s],
        )


# ---------------------------------------------------------------------------
# Explanation (for interviews)
# ---------------------------------------------------------------------------
# What this file does:
#   Defines the two persisted shapes. SessionRecord is one commit; it is
#   frozen because nothing may change a session after it is committed.
#   DailyRecord is one row of the summary table.
#
# Key points:
#   - duration is a property computed from total_duration_ms, so the two can
#     never disagree on disk.
#   - to_dict/from_dict use the camelCase keys of the existing raw log.
#   - to_row/from_row use the spreadsheet column headers; Work Sessions is a
#     newline-joined cell.
#
# Data flow:
#   SessionTimer.commit() → SessionRecord → RawLogStore (to_dict)
#                                         → daily_aggregator → DailyRecord
#                                           → TableRenderer (to_row)
