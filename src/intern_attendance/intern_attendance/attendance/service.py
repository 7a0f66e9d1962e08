from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime
from typing import Callable, Optional, Protocol, Sequence

from ..common.datetime_utils import clock_from_minutes, format_clock_12h, now_local, to_business_naive
from ..common.validators import optional_text, require_non_empty
from ..core.constants import DEFAULT_HISTORY_LIMIT, MAX_ORDINARY_CHECKINS_PER_DAY
from ..core.enums import Session
from ..core.exceptions import (
    AuthorizationError,
    CheckInLimitError,
    CheckInWindowError,
    CheckoutTooEarlyError,
    EntryNotFoundError,
    OpenSessionError,
    OvertimeNotApprovedError,
    ValidationError,
)
from .consolidator import consolidate
from .factory import SessionStrategyFactory
from .model import AttendanceEntry, ConsolidatedDay
from .policy import can_check_out_now, checkin_window_at, checkout_opens_at, compute_session_minutes, evaluate_check_in
from .repository import AttendanceRepository
from .windows import window_for

logger = logging.getLogger(__name__)


class OvertimeApprovals(Protocol):
    def is_approved_for(self, person_id: str, on_date: date) -> bool:
        raise NotImplementedError


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        overtime: Optional[OvertimeApprovals] = None,
        *,
        strategy_factory: Optional[SessionStrategyFactory] = None,
        clock: Callable[[], datetime] = now_local,
    ):
        self._attendance = attendance
        self._overtime = overtime
        self._factory = strategy_factory or SessionStrategyFactory()
        self._clock = clock

    def check_in(
        self,
        person_id: str,
        *,
        now: Optional[datetime] = None,
        photo_path: Optional[str] = None,
    ) -> AttendanceEntry:
        now = to_business_naive(now or self._clock())
        today = now.date()
        clock = now.time().replace(microsecond=0)
        person_id = str(person_id)

        if self._attendance.get_open_for_person(person_id):
            logger.info("Check-in rejected for %s: open session", person_id)
            raise OpenSessionError("Please check out your current session before checking in again")

        window = checkin_window_at(clock)
        if window is None:
            logger.info("Check-in rejected for %s: %s outside every window", person_id, clock)
            raise CheckInWindowError(
                "Time In is available 5:00 AM-12:00 PM, 12:40 PM-5:00 PM, "
                "and 6:50 PM-10:00 PM for approved overtime"
            )

        sessions = [e.session for e in self._attendance.list_for_person_and_date(person_id, today)]

        if window.session == Session.OVERTIME:
            if self._overtime is None or not self._overtime.is_approved_for(person_id, today):
                raise OvertimeNotApprovedError("Overtime check-in requires an approved overtime request for today")
            if Session.OVERTIME in sessions:
                raise CheckInLimitError("You have already checked in for overtime today")
        else:
            ordinary = [s for s in sessions if s != Session.OVERTIME]
            if len(ordinary) >= MAX_ORDINARY_CHECKINS_PER_DAY:
                raise CheckInLimitError(
                    f"You have reached the maximum of {MAX_ORDINARY_CHECKINS_PER_DAY} check-ins today"
                )
            if window.session in sessions:
                raise CheckInLimitError(f"You have already checked in for the {window.session.value} session")

        evaluation = evaluate_check_in(clock, factory=self._factory)
        entry = self._attendance.insert_attendance(
            person_id=person_id,
            work_date=today,
            time_in=clock,
            status=evaluation.status,
            late_deduction_hours=evaluation.deduction_hours,
            late_minutes=evaluation.late_minutes,
            photo_path=photo_path,
        )
        logger.info(
            "Check-in %s: person=%s session=%s status=%s late=%dmin deduction=%dh",
            entry.entry_id,
            person_id,
            evaluation.session.value,
            evaluation.status.value,
            evaluation.late_minutes,
            evaluation.deduction_hours,
        )
        return entry

    def check_out(
        self,
        person_id: str,
        entry_id: int,
        *,
        now: Optional[datetime] = None,
        work_documentation: Optional[str] = None,
        attachments: Sequence[str] = (),
    ) -> AttendanceEntry:
        now = to_business_naive(now or self._clock())
        person_id = str(person_id)

        entry = self._attendance.get_by_id(int(entry_id))
        if not entry:
            raise EntryNotFoundError("Attendance entry not found")
        if entry.person_id != person_id:
            raise AuthorizationError("This attendance entry belongs to someone else")
        if not entry.is_open:
            raise ValidationError("You have already checked out of this session")

        if not can_check_out_now(entry, now):
            opens_at = checkout_opens_at(entry)
            when = format_clock_12h(opens_at) if opens_at else "the end of the session"
            raise CheckoutTooEarlyError(f"Time Out for this session is available from {when}")

        documentation = require_non_empty(work_documentation, "Work documentation")

        session = entry.session
        if now.date() > entry.work_date:
            # Closing a session left open on an earlier day: close it at its cap.
            time_out = clock_from_minutes(window_for(session).end_cap)
        else:
            time_out = now.time().replace(microsecond=0)

        worked = compute_session_minutes(session, entry.time_in, time_out)
        attachments = tuple(a for a in (optional_text(x) for x in attachments) if a)

        ok = self._attendance.update_checkout(
            entry_id=entry.entry_id,
            time_out=time_out,
            worked_minutes=worked,
            work_documentation=documentation,
            attachments=attachments,
        )
        if not ok:
            raise ValidationError("You have already checked out of this session")

        logger.info("Check-out %s: person=%s worked=%dmin", entry.entry_id, person_id, worked)
        return replace(
            entry,
            time_out=time_out,
            worked_minutes=worked,
            work_documentation=documentation,
            attachments=attachments or entry.attachments,
        )

    def get_open_entry(self, person_id: str) -> Optional[AttendanceEntry]:
        return self._attendance.get_open_for_person(str(person_id))

    def get_history(self, person_id: str, *, limit: int = DEFAULT_HISTORY_LIMIT) -> Sequence[AttendanceEntry]:
        return self._attendance.get_recent_for_person(str(person_id), limit)

    def list_entries(
        self,
        *,
        person_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> Sequence[AttendanceEntry]:
        if start and end and end < start:
            raise ValidationError("End date must be on or after start date")
        return self._attendance.list_attendance(
            person_id=str(person_id) if person_id is not None else None,
            start_date=start,
            end_date=end,
        )

    def list_days(
        self,
        *,
        person_id: Optional[str] = None,
        start: Optional[date] = None,
        end: Optional[date] = None,
    ) -> list[ConsolidatedDay]:
        return consolidate(self.list_entries(person_id=person_id, start=start, end=end))
