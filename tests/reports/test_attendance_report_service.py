from __future__ import annotations

from datetime import date

import pytest

from src.intern_attendance.intern_attendance.attendance.model import AttendanceEntry
from src.intern_attendance.intern_attendance.core.enums import AttendanceStatus
from src.intern_attendance.intern_attendance.core.exceptions import ValidationError
from src.intern_attendance.intern_attendance.reports.service import REPORT_FIELDS, ReportService


class FakeAttendanceRepo:
    def __init__(self, rows):
        self._rows = rows
        self.last_args = None

    def list_attendance(self, *, person_id=None, start_date=None, end_date=None):
        self.last_args = {"person_id": person_id, "start_date": start_date, "end_date": end_date}
        return [r for r in self._rows if person_id is None or r.person_id == person_id]


def _rows():
    return [
        AttendanceEntry(
            entry_id=1,
            person_id="p1",
            work_date=date(2026, 3, 2),
            time_in="08:30",
            time_out="12:00",
            status=AttendanceStatus.LATE,
            late_minutes=25,
            late_deduction_hours=1,
            full_name="Ana Cruz",
            work_documentation="Set up CI",
        ),
        AttendanceEntry(
            entry_id=2,
            person_id="p1",
            work_date=date(2026, 3, 2),
            time_in="13:00",
            time_out="17:00",
            full_name="Ana Cruz",
        ),
        AttendanceEntry(
            entry_id=3,
            person_id="p2",
            work_date=date(2026, 3, 2),
            time_in="08:00",
            time_out="12:00",
            full_name="Ben Reyes",
        ),
    ]


def test_report_rows_and_summaries():
    repo = FakeAttendanceRepo(_rows())
    service = ReportService(repo)

    data = service.build_attendance_report(start=date(2026, 3, 1), end=date(2026, 3, 7))

    assert repo.last_args == {"person_id": None, "start_date": date(2026, 3, 1), "end_date": date(2026, 3, 7)}
    assert len(data.rows) == 2
    ana = next(r for r in data.rows if r["person_id"] == "p1")
    assert ana["morning_time_in"] == "08:30 AM"
    assert ana["afternoon_time_out"] == "05:00 PM"
    assert ana["ot_time_in"] == "-"
    assert ana["overall_status"] == "Late"
    assert ana["total_deduction"] == 1
    assert ana["work_documentation"] == "Set up CI"
    assert set(REPORT_FIELDS) <= set(ana)

    # Highest worked time first.
    assert [s["person_id"] for s in data.summary] == ["p1", "p2"]
    assert data.summary[0]["total_worked_minutes"] == 210 + 240 - 25
    assert data.summary[1]["total_worked_hours"] == "04:00"


def test_report_for_one_person_with_additional_minutes():
    repo = FakeAttendanceRepo(_rows())
    data = ReportService(repo).build_attendance_report(
        start=date(2026, 3, 1),
        end=date(2026, 3, 7),
        person_id="p2",
        additional_minutes={"p2": 30},
    )

    assert repo.last_args["person_id"] == "p2"
    assert len(data.summary) == 1
    assert data.summary[0]["additional_minutes"] == 30
    assert data.summary[0]["total_worked_minutes"] == 270


def test_report_rejects_inverted_range():
    with pytest.raises(ValidationError):
        ReportService(FakeAttendanceRepo([])).build_attendance_report(start=date(2026, 3, 7), end=date(2026, 3, 1))
