from __future__ import annotations

from datetime import date

import pytest

from irs_timesheet.common.datetime_utils import (
    day_label,
    display_date_sort_key,
    week_bounds,
    week_id_for,
    week_label,
)
from irs_timesheet.core.enums import ShiftType
from irs_timesheet.core.exceptions import ValidationError
from irs_timesheet.timesheets.hours import hours_from_range, resolve_hours
from irs_timesheet.timesheets.service import build_day_entry, split_week_id


@pytest.mark.parametrize(
    "start,finish,lunch,expected",
    [
        ("06:45", "16:30", True, 9.25),
        ("06:45", "16:30", False, 9.75),
        ("22:00", "06:00", True, 7.5),
        ("09:00", "09:15", True, 0.0),
        ("08:00", "08:00", False, 0.0),
    ],
)
def test_hours_from_range(start, finish, lunch, expected):
    assert hours_from_range(start, finish, lunch) == expected


def test_resolve_hours_falls_back_to_typed_value():
    assert resolve_hours(start_time="08:00", finish_time=None, lunch_taken=False, explicit_hours=7.333) == 7.33
    assert resolve_hours(start_time=None, finish_time=None, lunch_taken=True, explicit_hours=None) == 0


def test_build_day_entry_normalizes_payload():
    entry = build_day_entry(
        {
            "id": "SAT",
            "start_time": "7:00",
            "finish_time": "15:30",
            "lunch_taken": True,
            "living_away": "yes",
            "shift_type": "Weekend",
            "location": " Site A ",
        },
        monday=date(2024, 3, 4),
    )

    assert entry.label == "Saturday 09/03/2024"
    assert entry.start_time == "07:00"
    assert entry.hours == 8.0
    assert (entry.lunch_taken, entry.living_away) == ("Yes", "Yes")
    assert entry.shift_type == ShiftType.WEEKEND
    assert entry.location == "Site A"


@pytest.mark.parametrize(
    "payload",
    [
        {"id": "mon", "hours": "abc"},
        {"id": "mon", "hours": -1},
        {"id": "mon", "hours": 1, "start_time": "25:00"},
        {"id": "mon", "hours": 1, "shift_type": "Graveyard"},
        {"id": "mon", "hours": 1, "lunch_taken": "maybe"},
    ],
)
def test_build_day_entry_rejects(payload):
    with pytest.raises(ValidationError):
        build_day_entry(payload)


def test_week_helpers():
    assert week_bounds(date(2024, 3, 6)) == (date(2024, 3, 4), date(2024, 3, 10))
    assert week_bounds(date(2024, 3, 10)) == (date(2024, 3, 4), date(2024, 3, 10))
    assert week_id_for("u1", date(2024, 3, 4)) == "2024-03-10_u1"
    assert week_label(date(2024, 3, 4)) == "Week ending Sunday 10/03/2024"
    assert day_label(date(2024, 3, 5)) == "Tuesday 05/03/2024"
    assert split_week_id("2024-03-10_abc_def") == (date(2024, 3, 10), "abc_def")


def test_display_date_sort_key_orders_across_years():
    values = ["01/02/2024", "31/12/2023", "15/01/2024"]
    assert sorted(values, key=display_date_sort_key, reverse=True) == ["01/02/2024", "15/01/2024", "31/12/2023"]
