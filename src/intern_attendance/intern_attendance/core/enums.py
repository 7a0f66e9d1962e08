from __future__ import annotations

from enum import Enum


class Session(str, Enum):
    """Named daily work period, derived from the check-in time."""

    MORNING = "Morning"
    AFTERNOON = "Afternoon"
    OVERTIME = "Overtime"


class AttendanceStatus(str, Enum):
    """Check-in status, fixed at check-in time and never recomputed."""

    ON_TIME = "On-Time"
    LATE = "Late"


class RequestStatus(str, Enum):
    """Overtime request approval state."""

    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
