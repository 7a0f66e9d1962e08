from __future__ import annotations

import logging
from datetime import date
from typing import Iterable

from ..common.datetime_utils import to_minutes
from ..core.enums import AttendanceStatus, Session
from .classifier import classify_session
from .model import AttendanceEntry, ConsolidatedDay

logger = logging.getLogger(__name__)

_SLOT_PREFIX = {
    Session.MORNING: "morning",
    Session.AFTERNOON: "afternoon",
    Session.OVERTIME: "ot",
}


def _fill_slot(day: ConsolidatedDay, session: Session, entry: AttendanceEntry) -> None:
    prefix = _SLOT_PREFIX[session]
    setattr(day, f"{prefix}_time_in", entry.time_in)
    setattr(day, f"{prefix}_time_out", entry.time_out)
    setattr(day, f"{prefix}_status", entry.status)
    setattr(day, f"{prefix}_deduction", int(entry.late_deduction_hours or 0))


def _carry_documents(day: ConsolidatedDay, entry: AttendanceEntry) -> None:
    if entry.work_documentation:
        day.work_documentation = entry.work_documentation
    if entry.attachments:
        day.attachments = entry.attachments
    if entry.photo_path:
        day.photo_path = entry.photo_path
    if entry.full_name:
        day.full_name = entry.full_name


def _finish(day: ConsolidatedDay) -> ConsolidatedDay:
    statuses = (day.morning_status, day.afternoon_status, day.ot_status)
    deductions = (day.morning_deduction, day.afternoon_deduction, day.ot_deduction)

    day.overall_status = AttendanceStatus.LATE if AttendanceStatus.LATE in statuses else AttendanceStatus.ON_TIME
    day.total_deduction = sum(d for d in deductions if d is not None)
    return day


def _chronological(entry: AttendanceEntry) -> tuple[date, int]:
    return entry.work_date, to_minutes(entry.time_in) or 0


def consolidate(entries: Iterable[AttendanceEntry]) -> list[ConsolidatedDay]:
    """Fold raw session entries into one record per (person, date).

    Each entry lands in the slot of its classified session. A single Late
    session marks the whole day Late; per-session deductions are kept as
    recorded and summed. Documents from the latest session of the day win.
    Most recent date first.
    """

    days: dict[tuple[str, date], ConsolidatedDay] = {}
    ot_markers: dict[tuple[str, date], AttendanceEntry] = {}

    for entry in sorted(entries, key=_chronological):
        key = (entry.person_id, entry.work_date)
        session = classify_session(entry.time_in)
        if session is None:
            logger.warning("Skipping entry %s with unparsable time_in %r", entry.entry_id, entry.time_in)
            continue

        day = days.get(key)
        if day is None:
            day = ConsolidatedDay(person_id=entry.person_id, work_date=entry.work_date)
            days[key] = day

        _fill_slot(day, session, entry)
        _carry_documents(day, entry)
        day.entry_ids.append(entry.entry_id)

        if entry.ot_time_in is not None:
            ot_markers[key] = entry

    # Legacy rows record overtime as markers on an ordinary entry.
    for key, entry in ot_markers.items():
        day = days[key]
        if day.ot_time_in is None:
            day.ot_time_in = entry.ot_time_in
            day.ot_time_out = entry.ot_time_out

    ordered = sorted(days.values(), key=lambda d: d.work_date, reverse=True)
    return [_finish(d) for d in ordered]
