from __future__ import annotations

import pytest

from src.intern_attendance.intern_attendance.attendance.factory import SessionStrategyFactory
from src.intern_attendance.intern_attendance.attendance.policy import evaluate_check_in
from src.intern_attendance.intern_attendance.attendance.strategies.afternoon_strategy import AfternoonStrategy
from src.intern_attendance.intern_attendance.attendance.strategies.morning_strategy import MorningStrategy
from src.intern_attendance.intern_attendance.attendance.strategies.overtime_strategy import OvertimeStrategy
from src.intern_attendance.intern_attendance.core.enums import AttendanceStatus, Session
from src.intern_attendance.intern_attendance.core.exceptions import ValidationError


def test_factory_picks_strategy_per_session():
    factory = SessionStrategyFactory()

    assert isinstance(factory.for_session(Session.MORNING), MorningStrategy)
    assert isinstance(factory.for_session(Session.AFTERNOON), AfternoonStrategy)
    assert isinstance(factory.for_session(Session.OVERTIME), OvertimeStrategy)


@pytest.mark.parametrize("time_in", ["05:00", "07:59", "08:00", "08:05", "08:05:59"])
def test_morning_within_grace_is_on_time(time_in):
    result = evaluate_check_in(time_in)

    assert result.session == Session.MORNING
    assert result.status == AttendanceStatus.ON_TIME
    assert result.deduction_hours == 0
    assert result.late_minutes == 0


def test_morning_late_before_nine_deducts_one_hour():
    result = evaluate_check_in("08:30")

    assert result.status == AttendanceStatus.LATE
    assert result.deduction_hours == 1
    assert result.late_minutes == 25


def test_morning_from_nine_deducts_two_hours():
    at_nine = evaluate_check_in("09:00")
    result = evaluate_check_in("09:15 AM")

    assert at_nine.deduction_hours == 2
    assert result.status == AttendanceStatus.LATE
    assert result.deduction_hours == 2
    assert result.late_minutes == 70


def test_afternoon_late_counts_minutes_from_one_pm():
    result = evaluate_check_in("13:10")

    assert result.session == Session.AFTERNOON
    assert result.status == AttendanceStatus.LATE
    assert result.deduction_hours == 1
    assert result.late_minutes == 10


def test_afternoon_within_grace_is_on_time():
    result = evaluate_check_in("01:05 PM")

    assert result.status == AttendanceStatus.ON_TIME
    assert result.deduction_hours == 0


def test_overtime_has_no_lateness_policy():
    result = evaluate_check_in("21:30")

    assert result.session == Session.OVERTIME
    assert result.status == AttendanceStatus.ON_TIME
    assert result.deduction_hours == 0
    assert result.late_minutes == 0


def test_unparsable_check_in_time_is_rejected():
    with pytest.raises(ValidationError):
        evaluate_check_in("quarter past eight")
