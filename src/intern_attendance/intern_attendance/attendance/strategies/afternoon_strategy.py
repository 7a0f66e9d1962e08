from __future__ import annotations

from ...core.constants import AFTERNOON_BASELINE, AFTERNOON_LATE_THRESHOLD, LATE_DEDUCTION_HOURS
from ...core.enums import Session
from .base import CheckInEvaluation, SessionStrategy


class AfternoonStrategy(SessionStrategy):
    """Afternoon: on time up to 13:05, otherwise 1h deduction.

    Late minutes count from 13:00, not from the end of grace.
    """

    session = Session.AFTERNOON

    def decide_checkin(self, minutes: int) -> CheckInEvaluation:
        if minutes <= AFTERNOON_LATE_THRESHOLD:
            return self.on_time()
        return self.late(late_minutes=minutes - AFTERNOON_BASELINE, deduction_hours=LATE_DEDUCTION_HOURS)
