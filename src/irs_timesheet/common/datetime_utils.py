from __future__ import annotations

from datetime import date, datetime, timedelta

from ..core.constants import DISPLAY_DATE_FORMAT, ISO_DATE_FORMAT

DAY_NAMES = ("Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, ISO_DATE_FORMAT).date()


def format_display_date(value: date) -> str:
    return value.strftime(DISPLAY_DATE_FORMAT)


def parse_display_date(value: str) -> date:
    return datetime.strptime(value, DISPLAY_DATE_FORMAT).date()


def display_date_sort_key(value: str) -> str:
    """DD/MM/YYYY -> YYYY-MM-DD so plain string ordering follows the calendar.

    Mirrors the split/reverse/join the store fallback needs; malformed
    values sort as-is.
    """
    parts = (value or "").split("/")
    if len(parts) != 3:
        return value or ""
    return "-".join(reversed(parts))


def week_bounds(day: date) -> tuple[date, date]:
    """Monday and Sunday of the week containing ``day``."""
    monday = day - timedelta(days=day.weekday())
    return monday, monday + timedelta(days=6)


def week_end_iso(day: date) -> str:
    _, sunday = week_bounds(day)
    return sunday.strftime(ISO_DATE_FORMAT)


def week_id_for(employee_id: str, day: date) -> str:
    """Deterministic week key: ISO date of the closing Sunday scoped by employee id."""
    return f"{week_end_iso(day)}_{employee_id}"


def week_label(day: date) -> str:
    _, sunday = week_bounds(day)
    return f"Week ending Sunday {format_display_date(sunday)}"


def day_label(day: date) -> str:
    return f"{DAY_NAMES[day.weekday()]} {format_display_date(day)}"


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()
