from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from ...core.enums import AttendanceStatus, Session
from ..windows import SessionWindow, window_for


@dataclass(frozen=True)
class CheckInEvaluation:
    session: Session
    status: AttendanceStatus
    late_minutes: int = 0
    deduction_hours: int = 0


class SessionStrategy(ABC):
    """Strategy Pattern: encapsulate one session's lateness policy."""

    session: Session

    @property
    def window(self) -> SessionWindow:
        return window_for(self.session)

    def on_time(self) -> CheckInEvaluation:
        return CheckInEvaluation(session=self.session, status=AttendanceStatus.ON_TIME)

    def late(self, *, late_minutes: int, deduction_hours: int) -> CheckInEvaluation:
        return CheckInEvaluation(
            session=self.session,
            status=AttendanceStatus.LATE,
            late_minutes=max(int(late_minutes), 0),
            deduction_hours=int(deduction_hours),
        )

    @abstractmethod
    def decide_checkin(self, minutes: int) -> CheckInEvaluation:
        raise NotImplementedError
