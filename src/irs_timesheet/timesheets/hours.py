from __future__ import annotations

from typing import Optional

from ..core.constants import LUNCH_BREAK_MINUTES


def _minutes(hhmm: str) -> int:
    h, m = hhmm.split(":")
    return int(h) * 60 + int(m)


def hours_from_range(start_time: str, finish_time: str, lunch_taken: bool) -> float:
    """Worked hours between two HH:MM values.

    A finish earlier than the start means the shift ran past midnight.
    """
    minutes = _minutes(finish_time) - _minutes(start_time)
    if minutes < 0:
        minutes += 24 * 60
    if lunch_taken:
        minutes -= LUNCH_BREAK_MINUTES
    return round(max(minutes, 0) / 60, 2)


def resolve_hours(
    *,
    start_time: Optional[str],
    finish_time: Optional[str],
    lunch_taken: bool,
    explicit_hours: Optional[float],
) -> float:
    """A complete time range wins over a typed-in hours value."""
    if start_time and finish_time:
        return hours_from_range(start_time, finish_time, lunch_taken)
    return round(float(explicit_hours or 0), 2)
