from __future__ import annotations

from dataclasses import dataclass

from ..core import constants as c
from ..core.enums import Session


@dataclass(frozen=True)
class SessionWindow:
    """Clock boundaries of one session, as minutes since local midnight.

    ``count_start`` is where credited time starts; arrivals up to ``grace_until``
    are billed from ``count_start``. Check-in windows are half-open.
    """

    session: Session
    count_start: int
    grace_until: int
    checkin_from: int
    checkin_until: int
    checkout_from: int
    end_cap: int

    def accepts_checkin(self, minutes: int) -> bool:
        return self.checkin_from <= minutes < self.checkin_until

    def within_grace(self, minutes: int) -> bool:
        return minutes <= self.grace_until


MORNING = SessionWindow(
    session=Session.MORNING,
    count_start=c.MORNING_COUNT_START,
    grace_until=c.MORNING_BASELINE,
    checkin_from=c.MORNING_CHECKIN_FROM,
    checkin_until=c.MORNING_CHECKIN_UNTIL,
    checkout_from=c.MORNING_CHECKOUT_FROM,
    end_cap=c.MORNING_END_CAP,
)

AFTERNOON = SessionWindow(
    session=Session.AFTERNOON,
    count_start=c.AFTERNOON_BASELINE,
    grace_until=c.AFTERNOON_LATE_THRESHOLD,
    checkin_from=c.AFTERNOON_CHECKIN_FROM,
    checkin_until=c.AFTERNOON_CHECKIN_UNTIL,
    checkout_from=c.AFTERNOON_CHECKOUT_FROM,
    end_cap=c.AFTERNOON_END_CAP,
)

OVERTIME = SessionWindow(
    session=Session.OVERTIME,
    count_start=c.OVERTIME_COUNT_START,
    grace_until=c.OVERTIME_COUNT_START,
    checkin_from=c.OVERTIME_CHECKIN_FROM,
    checkin_until=c.OVERTIME_CHECKIN_UNTIL,
    checkout_from=c.OVERTIME_CHECKOUT_FROM,
    end_cap=c.OVERTIME_END_CAP,
)

_WINDOWS = {w.session: w for w in (MORNING, AFTERNOON, OVERTIME)}


def window_for(session: Session) -> SessionWindow:
    return _WINDOWS[Session(session)]
