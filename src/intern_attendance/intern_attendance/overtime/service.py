from __future__ import annotations

import logging
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import optional_text, require_non_empty
from ..core.enums import RequestStatus
from ..core.exceptions import EntryNotFoundError, ValidationError
from .model import OvertimePeriod, OvertimeRequest
from .repository import OvertimeRepository

logger = logging.getLogger(__name__)


def _parse_date(value: Any, field_name: str) -> Optional[date]:
    if value is None or value == "":
        return None
    if isinstance(value, date):
        return value
    try:
        return parse_iso_date(str(value))
    except ValueError:
        raise ValidationError(f"{field_name} must be YYYY-MM-DD")


def _parse_hours(value: Any) -> Optional[Decimal]:
    if value is None or value == "":
        return None
    try:
        hours = Decimal(str(value))
    except InvalidOperation:
        raise ValidationError("Anticipated hours must be a number")
    if not hours.is_finite():
        raise ValidationError("Anticipated hours must be a number")
    if hours < 0:
        raise ValidationError("Anticipated hours cannot be negative")
    return hours


def normalize_periods(periods: Optional[Iterable[Mapping[str, Any]]]) -> list[OvertimePeriod]:
    """Drop empty periods; a period without an end date covers its start date only."""
    out: list[OvertimePeriod] = []
    for p in periods or []:
        if not p:
            continue
        start = _parse_date(p.get("start_date"), "Period start date")
        if start is None:
            continue
        end = _parse_date(p.get("end_date"), "Period end date") or start
        if end < start:
            raise ValidationError("Period end date must be on or after its start date")
        out.append(
            OvertimePeriod(
                start_date=start,
                end_date=end,
                start_time=optional_text(p.get("start_time")),
                end_time=optional_text(p.get("end_time")),
            )
        )
    return out


class OvertimeService:
    def __init__(self, requests: OvertimeRepository):
        self._requests = requests

    def submit(
        self,
        *,
        person_id: str,
        employee_name: str,
        job_position: str,
        periods: Optional[Iterable[Mapping[str, Any]]] = None,
        date_completed: Any = None,
        department: Optional[str] = None,
        anticipated_hours: Any = None,
        explanation: Optional[str] = None,
        today: Optional[date] = None,
    ) -> int:
        name = require_non_empty(employee_name, "Employee name")
        position = require_non_empty(job_position, "Job position")

        request_id = self._requests.create(
            person_id=str(person_id),
            employee_name=name,
            job_position=position,
            date_completed=_parse_date(date_completed, "Date completed") or today or now_local().date(),
            department=optional_text(department),
            periods=normalize_periods(periods),
            anticipated_hours=_parse_hours(anticipated_hours),
            explanation=optional_text(explanation),
        )
        logger.info("Overtime request %s submitted by %s", request_id, person_id)
        return request_id

    def _decide(
        self,
        *,
        request_id: int,
        status: RequestStatus,
        decided_by: str,
        approval_date: Optional[date],
        admin_note: str,
    ) -> None:
        req = self._requests.get(request_id=int(request_id))
        if not req:
            raise EntryNotFoundError("Overtime request not found")
        if req.status != RequestStatus.PENDING:
            raise ValidationError("Overtime request has already been decided")

        ok = self._requests.decide(
            request_id=int(request_id),
            status=status,
            decided_by=str(decided_by),
            approval_date=approval_date,
            admin_note=optional_text(admin_note),
        )
        if not ok:
            raise ValidationError("Overtime request has already been decided")
        logger.info("Overtime request %s %s by %s", request_id, status.value, decided_by)

    def approve(
        self,
        *,
        request_id: int,
        decided_by: str,
        approval_date: Any = None,
        admin_note: str = "",
        today: Optional[date] = None,
    ) -> None:
        self._decide(
            request_id=request_id,
            status=RequestStatus.APPROVED,
            decided_by=decided_by,
            approval_date=_parse_date(approval_date, "Approval date") or today or now_local().date(),
            admin_note=admin_note,
        )

    def reject(self, *, request_id: int, decided_by: str, admin_note: str = "") -> None:
        self._decide(
            request_id=request_id,
            status=RequestStatus.REJECTED,
            decided_by=decided_by,
            approval_date=None,
            admin_note=admin_note,
        )

    def is_approved_for(self, person_id: str, on_date: date) -> bool:
        approved = self._requests.list_requests(person_id=str(person_id), status=RequestStatus.APPROVED, limit=None)
        return any(r.covers(on_date) for r in approved)

    def list_for_person(self, person_id: str) -> Sequence[OvertimeRequest]:
        return self._requests.list_requests(person_id=str(person_id))

    def list_pending(self) -> Sequence[OvertimeRequest]:
        return self._requests.list_requests(status=RequestStatus.PENDING, limit=500)
