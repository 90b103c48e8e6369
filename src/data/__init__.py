from .models import DailyRecord, SessionRecord
from .raw_log import RawLogStore
from .log_store import LogStore

__all__ = ["DailyRecord", "SessionRecord", "RawLogStore", "LogStore"]
