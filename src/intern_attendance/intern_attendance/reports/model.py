from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..common.datetime_utils import format_minutes


@dataclass(frozen=True)
class RangeSummary:
    """Per-person totals over a set of days. Purely computed."""

    person_id: str
    total_days: int
    on_time_days: int
    late_days: int
    total_late_minutes: int
    total_deduction_hours: int
    additional_minutes: int
    total_worked_minutes: int
    full_name: Optional[str] = None

    @property
    def total_worked_hours(self) -> str:
        return format_minutes(self.total_worked_minutes)

    def to_dict(self) -> dict:
        return {
            "person_id": self.person_id,
            "full_name": self.full_name,
            "total_days": self.total_days,
            "on_time_days": self.on_time_days,
            "late_days": self.late_days,
            "total_late_minutes": self.total_late_minutes,
            "total_deduction_hours": self.total_deduction_hours,
            "additional_minutes": self.additional_minutes,
            "total_worked_minutes": self.total_worked_minutes,
            "total_worked_hours": self.total_worked_hours,
        }


@dataclass(frozen=True)
class ReportData:
    rows: list[dict]
    summary: list[dict]
