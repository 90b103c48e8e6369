"""
Error types raised by the tracker core.

Everything derives from TrackerError so the UI can catch one base class and
still tell a bad duration string apart from a failed save.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from src.data.models import SessionRecord


class TrackerError(Exception):
    """Base class for all tracker errors."""


class MalformedDurationError(TrackerError, ValueError):
    """A duration string is not exactly three numeric HH:MM:SS fields."""

    def __init__(self, value: object) -> None:
        super().__init__(f"Malformed duration {value!r}: expected HH:MM:SS")
        self.value = value


class InvalidTimerStateError(TrackerError, RuntimeError):
    """A timer operation was called in a state that does not allow it."""


class PersistenceWriteError(TrackerError):
    """
    Saving a session to disk failed.

    The record is attached so the caller can retry. raw_log_saved and
    table_saved tell which of the two views made it to disk before the
    failure.
    """

    def __init__(
        self,
        message: str,
        record: Optional["SessionRecord"] = None,
        path: Optional[Path] = None,
        raw_log_saved: bool = False,
        table_saved: bool = False,
    ) -> None:
        super().__init__(message)
        self.record = record
        self.path = path
        self.raw_log_saved = raw_log_saved
        self.table_saved = table_saved
