from __future__ import annotations

import logging
from datetime import date
from typing import Iterable, Mapping, Optional

from ..attendance.classifier import classify_session
from ..attendance.model import AttendanceEntry
from ..attendance.policy import compute_session_minutes, entry_worked_minutes
from ..common.datetime_utils import to_minutes
from ..core.enums import AttendanceStatus, Session
from .model import RangeSummary

logger = logging.getLogger(__name__)


def _marker_minutes(entry: AttendanceEntry) -> int:
    if entry.ot_time_in is None or entry.ot_time_out is None:
        return 0
    return compute_session_minutes(Session.OVERTIME, entry.ot_time_in, entry.ot_time_out)


def aggregate(entries: Iterable[AttendanceEntry], person_id: str, *, additional_minutes: int = 0) -> RangeSummary:
    """Sum one person's entries into a RangeSummary.

    Worked time is credited inside each session's baseline/cap envelope, then
    reduced by the late minutes recorded at check-in. Deduction hours are
    reported separately and never subtracted from minutes. Entries whose
    ``time_in`` does not classify are left out, as in the day view. Legacy
    overtime markers count once per day, only when no Overtime entry exists.
    """

    person_id = str(person_id)
    days: dict[date, bool] = {}
    overtime_days: set[date] = set()
    ot_markers: dict[date, AttendanceEntry] = {}
    late_minutes = 0
    deduction_hours = 0
    worked = 0
    full_name: Optional[str] = None

    mine = [e for e in entries if e.person_id == person_id]
    for e in sorted(mine, key=lambda x: (x.work_date, to_minutes(x.time_in) or 0)):
        session = classify_session(e.time_in)
        if session is None:
            logger.warning("Leaving entry %s with unparsable time_in %r out of totals", e.entry_id, e.time_in)
            continue

        is_late = e.status == AttendanceStatus.LATE
        days[e.work_date] = days.get(e.work_date, False) or is_late
        late_minutes += int(e.late_minutes or 0)
        deduction_hours += int(e.late_deduction_hours or 0)
        worked += entry_worked_minutes(e)
        full_name = full_name or e.full_name

        if session == Session.OVERTIME:
            overtime_days.add(e.work_date)
        if e.ot_time_in is not None:
            ot_markers[e.work_date] = e

    for work_date, e in ot_markers.items():
        if work_date not in overtime_days:
            worked += _marker_minutes(e)

    late_days = sum(1 for late in days.values() if late)
    additional = int(additional_minutes or 0)

    return RangeSummary(
        person_id=person_id,
        full_name=full_name,
        total_days=len(days),
        on_time_days=len(days) - late_days,
        late_days=late_days,
        total_late_minutes=late_minutes,
        total_deduction_hours=deduction_hours,
        additional_minutes=additional,
        total_worked_minutes=max(0, worked - late_minutes + additional),
    )


def aggregate_all(
    entries: Iterable[AttendanceEntry],
    *,
    additional_minutes: Optional[Mapping[str, int]] = None,
) -> list[RangeSummary]:
    """One summary per person with a classifiable entry, in first-seen order."""

    entries = list(entries)
    additional_minutes = additional_minutes or {}
    person_ids = list(dict.fromkeys(e.person_id for e in entries if classify_session(e.time_in) is not None))
    return [
        aggregate(entries, pid, additional_minutes=int(additional_minutes.get(pid, 0)))
        for pid in person_ids
    ]
