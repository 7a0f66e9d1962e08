from __future__ import annotations

from dataclasses import dataclass

from ..core.enums import Session
from .strategies.afternoon_strategy import AfternoonStrategy
from .strategies.base import SessionStrategy
from .strategies.morning_strategy import MorningStrategy
from .strategies.overtime_strategy import OvertimeStrategy


@dataclass
class SessionStrategyFactory:
    """Factory Pattern: choose the lateness strategy for a session."""

    def for_session(self, session: Session) -> SessionStrategy:
        if session == Session.MORNING:
            return MorningStrategy()
        if session == Session.AFTERNOON:
            return AfternoonStrategy()
        return OvertimeStrategy()
