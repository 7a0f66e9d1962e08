from __future__ import annotations

from typing import Optional

from ..common.datetime_utils import TimeValue, to_minutes
from ..core.constants import AFTERNOON_FROM, OVERTIME_FROM
from ..core.enums import Session


def classify_minutes(minutes: int) -> Session:
    if minutes < AFTERNOON_FROM:
        return Session.MORNING
    if minutes < OVERTIME_FROM:
        return Session.AFTERNOON
    return Session.OVERTIME


def classify_session(time_in: TimeValue) -> Optional[Session]:
    """Map a check-in time to its session.

    This is the only place hour thresholds decide session identity: check-in,
    checkout, consolidation and reporting all go through it. Never raises;
    unparsable input yields None.
    """

    minutes = to_minutes(time_in)
    if minutes is None:
        return None
    return classify_minutes(minutes)
