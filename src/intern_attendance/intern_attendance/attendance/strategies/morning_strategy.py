from __future__ import annotations

from ...core.constants import LATE_DEDUCTION_HOURS, MORNING_BASELINE, MORNING_VERY_LATE, VERY_LATE_DEDUCTION_HOURS
from ...core.enums import Session
from .base import CheckInEvaluation, SessionStrategy


class MorningStrategy(SessionStrategy):
    """Morning: on time up to 08:05, 1h deduction before 09:00, 2h from 09:00."""

    session = Session.MORNING

    def decide_checkin(self, minutes: int) -> CheckInEvaluation:
        if minutes <= MORNING_BASELINE:
            return self.on_time()

        deduction = VERY_LATE_DEDUCTION_HOURS if minutes >= MORNING_VERY_LATE else LATE_DEDUCTION_HOURS
        return self.late(late_minutes=minutes - MORNING_BASELINE, deduction_hours=deduction)
