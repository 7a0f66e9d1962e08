from __future__ import annotations

from datetime import date
from typing import Mapping, Optional

from ..attendance.consolidator import consolidate
from ..attendance.model import ConsolidatedDay
from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import format_clock_12h
from ..core.exceptions import ValidationError
from .aggregator import aggregate_all
from .model import ReportData

REPORT_FIELDS = [
    "work_date",
    "person_id",
    "full_name",
    "morning_time_in",
    "morning_time_out",
    "afternoon_time_in",
    "afternoon_time_out",
    "ot_time_in",
    "ot_time_out",
    "overall_status",
    "total_deduction",
    "work_documentation",
]


def day_to_row(day: ConsolidatedDay) -> dict:
    return {
        "work_date": day.work_date.strftime("%Y-%m-%d"),
        "person_id": day.person_id,
        "full_name": day.full_name or "-",
        "morning_time_in": format_clock_12h(day.morning_time_in),
        "morning_time_out": format_clock_12h(day.morning_time_out),
        "morning_status": day.morning_status.value if day.morning_status else None,
        "morning_deduction": day.morning_deduction,
        "afternoon_time_in": format_clock_12h(day.afternoon_time_in),
        "afternoon_time_out": format_clock_12h(day.afternoon_time_out),
        "afternoon_status": day.afternoon_status.value if day.afternoon_status else None,
        "afternoon_deduction": day.afternoon_deduction,
        "ot_time_in": format_clock_12h(day.ot_time_in),
        "ot_time_out": format_clock_12h(day.ot_time_out),
        "overall_status": day.overall_status.value,
        "total_deduction": day.total_deduction,
        "work_documentation": day.work_documentation or "",
        "attachments": list(day.attachments),
        "photo_path": day.photo_path,
    }


class ReportService:
    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def build_attendance_report(
        self,
        *,
        start: date,
        end: date,
        person_id: Optional[str] = None,
        additional_minutes: Optional[Mapping[str, int]] = None,
    ) -> ReportData:
        if end < start:
            raise ValidationError("End date must be on or after start date")

        entries = self._attendance.list_attendance(
            person_id=str(person_id) if person_id is not None else None,
            start_date=start,
            end_date=end,
        )

        rows = [day_to_row(d) for d in consolidate(entries)]
        summaries = aggregate_all(entries, additional_minutes=additional_minutes)
        summaries.sort(key=lambda s: s.total_worked_minutes, reverse=True)
        return ReportData(rows=rows, summary=[s.to_dict() for s in summaries])
