"""Progress and timing rules for workout sessions."""
from datetime import datetime
from typing import Iterable, Optional

from core.service.health_service import round_int


def percentage(done: int, total: int) -> int:
    """Whole-number percentage clamped to 0..100."""
    if total <= 0:
        return 0
    return max(0, min(100, round_int(done / total * 100)))


def elapsed_seconds(start: datetime, end: datetime) -> int:
    return round_int((end - start).total_seconds())


def session_duration(start: datetime, end: datetime, paused_duration: int) -> int:
    """Active seconds between start and end, excluding time spent paused."""
    return max(0, elapsed_seconds(start, end) - paused_duration)


def fold_pause(paused_duration: int, paused_at: Optional[datetime], now: datetime) -> int:
    """Add an open pause interval to the accumulated paused time."""
    if paused_at is None:
        return paused_duration
    return paused_duration + max(0, elapsed_seconds(paused_at, now))


def sum_set_durations(durations: Iterable[Optional[int]]) -> int:
    return sum(d or 0 for d in durations)


def completion_rate(completed: int, total: int) -> int:
    return round_int(completed / total * 100) if total else 0
