from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from ..core.enums import RequestStatus


@dataclass(frozen=True)
class OvertimePeriod:
    start_date: date
    end_date: date
    start_time: Optional[str] = None
    end_time: Optional[str] = None

    def covers(self, on_date: date) -> bool:
        return self.start_date <= on_date <= self.end_date

    def to_dict(self) -> dict:
        return {
            "start_date": self.start_date.isoformat(),
            "end_date": self.end_date.isoformat(),
            "start_time": self.start_time,
            "end_time": self.end_time,
        }


@dataclass(frozen=True)
class OvertimeRequest:
    """Domain entity: an overtime request whose approval gates overtime check-in."""

    request_id: int
    person_id: str
    employee_name: str
    job_position: str
    date_completed: date
    status: RequestStatus
    created_at: datetime
    department: Optional[str] = None
    periods: tuple[OvertimePeriod, ...] = field(default_factory=tuple)
    anticipated_hours: Optional[Decimal] = None
    explanation: Optional[str] = None
    decided_by: Optional[str] = None
    approval_date: Optional[date] = None
    admin_note: Optional[str] = None

    def covers(self, on_date: date) -> bool:
        """Whether the request authorizes overtime on ``on_date``.

        Requests without periods cover only their completion date.
        """
        if not self.periods:
            return self.date_completed == on_date
        return any(p.covers(on_date) for p in self.periods)
