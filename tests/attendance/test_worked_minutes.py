from __future__ import annotations

from datetime import date, datetime

import pytest

from src.intern_attendance.intern_attendance.attendance.model import AttendanceEntry
from src.intern_attendance.intern_attendance.attendance.policy import (
    can_check_out_now,
    checkin_window_at,
    compute_session_minutes,
    entry_worked_minutes,
)
from src.intern_attendance.intern_attendance.core.enums import Session


@pytest.mark.parametrize(
    "session, time_in, time_out, expected",
    [
        (Session.MORNING, "08:00", "12:00", 240),
        (Session.MORNING, "07:30", "12:00", 240),
        (Session.MORNING, "08:05", "12:00", 240),
        (Session.MORNING, "08:20", "12:30", 220),
        (Session.MORNING, "08:00 AM", "11:00 AM", 180),
        (Session.AFTERNOON, "13:00", "17:00", 240),
        (Session.AFTERNOON, "12:45", "17:45", 240),
        (Session.AFTERNOON, "13:10", "17:00", 230),
        (Session.OVERTIME, "18:55", "22:00", 180),
        (Session.OVERTIME, "19:30", "23:00", 150),
    ],
)
def test_compute_session_minutes(session, time_in, time_out, expected):
    assert compute_session_minutes(session, time_in, time_out) == expected


@pytest.mark.parametrize("t", ["08:00", "13:30", "20:00"])
def test_checkout_at_same_moment_credits_nothing(t):
    assert compute_session_minutes(Session.MORNING, t, t) == 0


def test_checkout_before_check_in_credits_nothing():
    assert compute_session_minutes(Session.AFTERNOON, "16:00", "14:00") == 0


def test_missing_or_bad_times_credit_nothing():
    assert compute_session_minutes(Session.MORNING, "08:00", None) == 0
    assert compute_session_minutes(Session.MORNING, "garbage", "12:00") == 0
    assert compute_session_minutes(None, "08:00", "12:00") == 0


def test_credited_minutes_never_exceed_envelope():
    for out in ("09:00", "11:59", "12:00", "15:00", "23:59"):
        assert 0 <= compute_session_minutes(Session.MORNING, "08:00", out) <= 240


def _entry(time_in, time_out=None, work_date=date(2026, 3, 2), **kw):
    return AttendanceEntry(entry_id=1, person_id="p1", work_date=work_date, time_in=time_in, time_out=time_out, **kw)


def test_can_check_out_only_from_session_end():
    entry = _entry("08:00")

    assert not can_check_out_now(entry, datetime(2026, 3, 2, 11, 59))
    assert can_check_out_now(entry, datetime(2026, 3, 2, 12, 0))


def test_can_check_out_afternoon_and_overtime():
    assert not can_check_out_now(_entry("13:00"), datetime(2026, 3, 2, 16, 30))
    assert can_check_out_now(_entry("13:00"), datetime(2026, 3, 2, 17, 0))
    assert not can_check_out_now(_entry("19:00"), datetime(2026, 3, 2, 21, 59))
    assert can_check_out_now(_entry("19:00"), datetime(2026, 3, 2, 22, 0))


def test_stale_entry_can_be_checked_out_next_day():
    entry = _entry("13:00")
    assert can_check_out_now(entry, datetime(2026, 3, 3, 6, 0))


def test_closed_or_unparsable_entries_cannot_be_checked_out():
    assert not can_check_out_now(_entry("08:00", "12:00"), datetime(2026, 3, 2, 12, 30))
    assert not can_check_out_now(_entry("bogus"), datetime(2026, 3, 2, 23, 0))


@pytest.mark.parametrize(
    "t, session",
    [
        ("05:00", Session.MORNING),
        ("11:59", Session.MORNING),
        ("12:40", Session.AFTERNOON),
        ("16:59", Session.AFTERNOON),
        ("18:50", Session.OVERTIME),
        ("21:59", Session.OVERTIME),
    ],
)
def test_checkin_windows_accept(t, session):
    assert checkin_window_at(t).session == session


@pytest.mark.parametrize("t", ["04:59", "12:10", "17:00", "18:30", "22:00", "nonsense"])
def test_checkin_windows_reject(t):
    assert checkin_window_at(t) is None


def test_entry_worked_minutes_prefers_stored_value():
    assert entry_worked_minutes(_entry("08:00", "12:00", worked_minutes=200)) == 200
    assert entry_worked_minutes(_entry("08:00", "12:00")) == 240
    assert entry_worked_minutes(_entry("08:00")) == 0
