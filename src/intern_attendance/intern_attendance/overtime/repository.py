from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Optional, Protocol, Sequence

from ..core.enums import RequestStatus
from .model import OvertimePeriod, OvertimeRequest


class OvertimeRepository(Protocol):
    def create(
        self,
        *,
        person_id: str,
        employee_name: str,
        job_position: str,
        date_completed: date,
        department: Optional[str],
        periods: Sequence[OvertimePeriod],
        anticipated_hours: Optional[Decimal],
        explanation: Optional[str],
    ) -> int:
        raise NotImplementedError

    def get(self, *, request_id: int) -> Optional[OvertimeRequest]:
        raise NotImplementedError

    def list_requests(
        self,
        *,
        person_id: Optional[str] = None,
        status: Optional[RequestStatus] = None,
        limit: Optional[int] = 200,
    ) -> Sequence[OvertimeRequest]:
        """Newest first; ``limit=None`` returns every match."""

        raise NotImplementedError

    def decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: str,
        approval_date: Optional[date],
        admin_note: Optional[str] = None,
    ) -> bool:
        """Set the decision; only PENDING requests are updated."""

        raise NotImplementedError
