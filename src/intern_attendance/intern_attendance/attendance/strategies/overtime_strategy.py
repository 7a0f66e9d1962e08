from __future__ import annotations

from ...core.enums import Session
from .base import CheckInEvaluation, SessionStrategy


class OvertimeStrategy(SessionStrategy):
    """Overtime is authorized separately and carries no lateness penalty."""

    session = Session.OVERTIME

    def decide_checkin(self, minutes: int) -> CheckInEvaluation:
        return self.on_time()
