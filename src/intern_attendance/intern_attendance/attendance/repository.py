from __future__ import annotations

from datetime import date, time
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceEntry


class AttendanceRepository(Protocol):
    """Persistence collaborator for attendance entries (plain CRUD)."""

    def list_attendance(
        self,
        *,
        person_id: Optional[str] = None,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
    ) -> Sequence[AttendanceEntry]:
        raise NotImplementedError

    def list_for_person_and_date(self, person_id: str, work_date: date) -> Sequence[AttendanceEntry]:
        raise NotImplementedError

    def get_recent_for_person(self, person_id: str, limit: int) -> Sequence[AttendanceEntry]:
        raise NotImplementedError

    def get_open_for_person(self, person_id: str) -> Optional[AttendanceEntry]:
        raise NotImplementedError

    def get_by_id(self, entry_id: int) -> Optional[AttendanceEntry]:
        raise NotImplementedError

    def insert_attendance(
        self,
        *,
        person_id: str,
        work_date: date,
        time_in: time,
        status: AttendanceStatus,
        late_deduction_hours: int,
        late_minutes: int,
        photo_path: Optional[str] = None,
    ) -> AttendanceEntry:
        """Insert a new open entry and return it with its assigned identity."""

        raise NotImplementedError

    def update_checkout(
        self,
        *,
        entry_id: int,
        time_out: time,
        worked_minutes: int,
        work_documentation: Optional[str],
        attachments: Sequence[str] = (),
    ) -> bool:
        """Close an open entry. Status and deduction columns are never touched."""

        raise NotImplementedError
