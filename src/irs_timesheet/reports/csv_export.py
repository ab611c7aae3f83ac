from __future__ import annotations

import re
from typing import Iterable, Optional

from ..core.constants import CSV_HEADER, UNKNOWN_EMPLOYEE_NAME, UTF8_BOM
from ..timesheets.model import WeekTimesheet

_UNSAFE_FILENAME_CHARS = re.compile(r"[^A-Za-z0-9_.-]")


def _quote(value: str) -> str:
    return '"' + (value or "").replace('"', '""') + '"'


def csv_rows(weeks: Iterable[WeekTimesheet]) -> list[str]:
    """One line per (week, day).

    Text columns are always quoted; hours and status are bare.
    """
    lines = [CSV_HEADER]
    for w in weeks:
        name = w.employee_name or UNKNOWN_EMPLOYEE_NAME
        for d in w.days:
            lines.append(
                ",".join(
                    [
                        _quote(name),
                        _quote(w.label),
                        _quote(w.week_start),
                        _quote(d.label),
                        f"{d.hours:.2f}",
                        w.status.value,
                    ]
                )
            )
    return lines


def render_csv(weeks: Iterable[WeekTimesheet]) -> str:
    return "\n".join(csv_rows(weeks))


def with_bom(text: str) -> str:
    """Excel needs the BOM to read UTF-8."""
    return text if text.startswith(UTF8_BOM) else UTF8_BOM + text


def sanitize_filename(name: str) -> str:
    base = _UNSAFE_FILENAME_CHARS.sub("_", (name or "").strip()) or "timesheet"
    if base.lower().endswith(".csv"):
        base = base[:-4]
    return f"{base}.csv"


def default_export_filename(employee_name: Optional[str], week_count: int) -> str:
    name = (employee_name or UNKNOWN_EMPLOYEE_NAME).strip().replace(" ", "_")
    return sanitize_filename(f"timesheet_{name}_{week_count}weeks")


def single_week_filename(employee_name: Optional[str]) -> str:
    name = (employee_name or "export").strip().replace(" ", "_")
    return sanitize_filename(f"timesheet_{name}")
