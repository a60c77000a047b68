import time
from datetime import datetime


def now_millis() -> int:
    """Current wall-clock time in milliseconds since the epoch."""
    return time.time_ns() // 1_000_000


def iso_week(moment: datetime) -> tuple[int, int]:
    """(ISO week number, ISO year) for the given moment."""
    year, week, _ = moment.isocalendar()
    return week, year
