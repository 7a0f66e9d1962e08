from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Mapping, Optional

from ..common.datetime_utils import TimeValue, parse_iso_date
from ..core.enums import AttendanceStatus, Session
from .classifier import classify_session


def _as_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    return parse_iso_date(str(value)[:10])


def _as_attachments(value: Any) -> tuple[str, ...]:
    if not value:
        return ()
    if isinstance(value, str):
        try:
            value = json.loads(value)
        except ValueError:
            return (value,)
        if isinstance(value, str):
            return (value,)
    return tuple(str(v) for v in value)


def _as_int(value: Any) -> Optional[int]:
    if value is None or value == "":
        return None
    return int(value)


@dataclass(frozen=True)
class AttendanceEntry:
    """Domain entity: one check-in event.

    Times are kept as received from the store (24h or 12h strings, ``time`` or
    MySQL ``timedelta``); every consumer normalizes them through
    ``common.datetime_utils``. ``status``, ``late_deduction_hours`` and
    ``late_minutes`` are written once at check-in.
    """

    entry_id: int
    person_id: str
    work_date: date
    time_in: TimeValue
    time_out: TimeValue = None
    status: AttendanceStatus = AttendanceStatus.ON_TIME
    late_deduction_hours: int = 0
    late_minutes: int = 0
    worked_minutes: Optional[int] = None
    photo_path: Optional[str] = None
    work_documentation: Optional[str] = None
    attachments: tuple[str, ...] = field(default_factory=tuple)
    ot_time_in: TimeValue = None
    ot_time_out: TimeValue = None
    full_name: Optional[str] = None

    @property
    def session(self) -> Optional[Session]:
        return classify_session(self.time_in)

    @property
    def is_open(self) -> bool:
        return self.time_out is None

    @classmethod
    def from_row(cls, row: Mapping[str, Any]) -> "AttendanceEntry":
        """Build an entry from a JSON-like record (store row or API payload)."""
        return cls(
            entry_id=int(row.get("entry_id", row.get("id"))),
            person_id=str(row.get("person_id", row.get("user_id"))),
            work_date=_as_date(row.get("work_date", row.get("date"))),
            time_in=row.get("time_in"),
            time_out=row.get("time_out") or None,
            status=AttendanceStatus(row.get("status") or AttendanceStatus.ON_TIME.value),
            late_deduction_hours=int(row.get("late_deduction_hours") or 0),
            late_minutes=int(row.get("late_minutes") or 0),
            worked_minutes=_as_int(row.get("worked_minutes")),
            photo_path=row.get("photo_path"),
            work_documentation=row.get("work_documentation"),
            attachments=_as_attachments(row.get("attachments")),
            ot_time_in=row.get("ot_time_in") or None,
            ot_time_out=row.get("ot_time_out") or None,
            full_name=row.get("full_name"),
        )


@dataclass
class ConsolidatedDay:
    """Read-model: one person-day folded from up to three session entries.

    Rebuilt on every read, never stored.
    """

    person_id: str
    work_date: date
    full_name: Optional[str] = None

    morning_time_in: TimeValue = None
    morning_time_out: TimeValue = None
    morning_status: Optional[AttendanceStatus] = None
    morning_deduction: Optional[int] = None

    afternoon_time_in: TimeValue = None
    afternoon_time_out: TimeValue = None
    afternoon_status: Optional[AttendanceStatus] = None
    afternoon_deduction: Optional[int] = None

    ot_time_in: TimeValue = None
    ot_time_out: TimeValue = None
    ot_status: Optional[AttendanceStatus] = None
    ot_deduction: Optional[int] = None

    overall_status: AttendanceStatus = AttendanceStatus.ON_TIME
    total_deduction: int = 0

    work_documentation: Optional[str] = None
    attachments: tuple[str, ...] = ()
    photo_path: Optional[str] = None
    entry_ids: list[int] = field(default_factory=list)
