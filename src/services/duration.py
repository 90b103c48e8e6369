"""
Duration codec — milliseconds <-> "HH:MM:SS".

Hours are never wrapped: 100 hours renders as "100:00:00". Sub-second
remainders are truncated, so decode(encode(x)) == x - x % 1000.
"""

from __future__ import annotations

from src.errors import MalformedDurationError

MS_PER_SECOND = 1000
MS_PER_MINUTE = 60 * MS_PER_SECOND
MS_PER_HOUR = 60 * MS_PER_MINUTE


def encode(ms: int) -> str:
    """Format elapsed milliseconds as HH:MM:SS."""
    ms = int(ms)
    if ms < 0:
        raise ValueError(f"Duration cannot be negative: {ms}")
    hours = ms // MS_PER_HOUR
    minutes = (ms % MS_PER_HOUR) // MS_PER_MINUTE
    seconds = (ms % MS_PER_MINUTE) // MS_PER_SECOND
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def decode(value: str) -> int:
    """Parse HH:MM:SS back to milliseconds."""
    if not isinstance(value, str):
        raise MalformedDurationError(value)
    parts = value.strip().split(":")
    if len(parts) != 3 or not all(p.isdecimal() for p in parts):
        raise MalformedDurationError(value)
    hours, minutes, seconds = (int(p) for p in parts)
    return hours * MS_PER_HOUR + minutes * MS_PER_MINUTE + seconds * MS_PER_SECOND
