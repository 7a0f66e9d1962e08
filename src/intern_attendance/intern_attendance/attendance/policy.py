"""Check-in evaluation, checkout eligibility and worked-minutes rules.

Every function takes the moment it reasons about as an argument; nothing here
reads the wall clock.
"""

from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional

from ..common.datetime_utils import TimeValue, clock_from_minutes, to_business_naive, to_minutes
from ..core.enums import Session
from ..core.exceptions import ValidationError
from .classifier import classify_minutes, classify_session
from .factory import SessionStrategyFactory
from .model import AttendanceEntry
from .strategies.base import CheckInEvaluation
from .windows import SessionWindow, window_for

logger = logging.getLogger(__name__)

_default_factory = SessionStrategyFactory()


def evaluate_check_in(time_in: TimeValue, *, factory: Optional[SessionStrategyFactory] = None) -> CheckInEvaluation:
    """Classify ``time_in`` and apply that session's lateness policy.

    Runs once, when the entry is written; the result is frozen into the entry.
    """

    minutes = to_minutes(time_in)
    if minutes is None:
        raise ValidationError(f"Invalid check-in time: {time_in!r}")

    session = classify_minutes(minutes)
    strategy = (factory or _default_factory).for_session(session)
    return strategy.decide_checkin(minutes)


def checkin_window_at(time_in: TimeValue) -> Optional[SessionWindow]:
    """The session window accepting a check-in at ``time_in``, if any."""
    minutes = to_minutes(time_in)
    if minutes is None:
        return None
    window = window_for(classify_minutes(minutes))
    return window if window.accepts_checkin(minutes) else None


def checkout_opens_at(entry: AttendanceEntry) -> Optional[datetime]:
    session = entry.session
    if session is None:
        return None
    return datetime.combine(entry.work_date, clock_from_minutes(window_for(session).checkout_from))


def can_check_out_now(entry: AttendanceEntry, now: datetime) -> bool:
    if not entry.is_open:
        return False

    opens_at = checkout_opens_at(entry)
    if opens_at is None:
        logger.warning("Entry %s has unparsable time_in %r", entry.entry_id, entry.time_in)
        return False
    return to_business_naive(now) >= opens_at


def compute_session_minutes(session: Optional[Session], time_in: TimeValue, time_out: TimeValue) -> int:
    """Credited minutes for one session.

    Arrivals within grace are billed from the session's counting start, later
    ones from the actual arrival; checkout is capped at the session end.
    """

    start = to_minutes(time_in)
    end = to_minutes(time_out)
    if session is None or start is None or end is None:
        if time_out is not None:
            logger.warning(
                "Cannot compute worked minutes (session=%s, time_in=%r, time_out=%r)",
                session,
                time_in,
                time_out,
            )
        return 0

    if end <= start:
        return 0

    window = window_for(session)
    effective_start = window.count_start if window.within_grace(start) else start
    effective_end = min(end, window.end_cap)
    return max(0, effective_end - effective_start)


def entry_worked_minutes(entry: AttendanceEntry) -> int:
    """Stored worked minutes when present, otherwise computed from the times."""
    if entry.worked_minutes is not None:
        return int(entry.worked_minutes)
    return compute_session_minutes(classify_session(entry.time_in), entry.time_in, entry.time_out)
