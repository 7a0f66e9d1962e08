from __future__ import annotations

import re
from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Optional, Union

from ..core.constants import BUSINESS_UTC_OFFSET_HOURS

TimeValue = Union[str, time, datetime, timedelta, None]

_CLOCK_RE = re.compile(r"^\s*(\d{1,2}):(\d{2})(?::(\d{2}))?\s*([AaPp]\.?[Mm]\.?)?\s*$")


def business_tz(offset_hours: int = BUSINESS_UTC_OFFSET_HOURS) -> timezone:
    return timezone(timedelta(hours=offset_hours))


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local(offset_hours: int = BUSINESS_UTC_OFFSET_HOURS) -> datetime:
    """Current wall-clock time in the business timezone.

    Note: Wrapped so tests can patch/mocked easier. Services accept an explicit
    ``now`` and only fall back to this.
    """
    return datetime.now(business_tz(offset_hours))


def parse_clock(value: Any) -> Optional[time]:
    """Normalize a wall-clock value into ``datetime.time``.

    Accepts 24-hour ``HH:MM[:SS]``, 12-hour ``HH:MM[:SS] AM/PM``, ``time``,
    ``datetime`` (aware values are converted to the business timezone) and
    ``timedelta`` as returned for MySQL TIME columns. Anything else yields None.
    """

    if value is None:
        return None

    if isinstance(value, datetime):
        if value.tzinfo is not None:
            value = value.astimezone(business_tz())
        return value.time().replace(tzinfo=None)

    if isinstance(value, time):
        return value.replace(tzinfo=None)

    if isinstance(value, timedelta):
        total_seconds = int(value.total_seconds())
        if total_seconds < 0 or total_seconds >= 86400:
            return None
        return time(total_seconds // 3600, (total_seconds % 3600) // 60, total_seconds % 60)

    if not isinstance(value, str):
        return None

    m = _CLOCK_RE.match(value)
    if not m:
        return None

    hours = int(m.group(1))
    minutes = int(m.group(2))
    seconds = int(m.group(3) or 0)
    meridiem = m.group(4)

    if meridiem:
        if not 1 <= hours <= 12:
            return None
        is_pm = meridiem[0] in "Pp"
        if hours == 12:
            hours = 0
        if is_pm:
            hours += 12

    if hours > 23 or minutes > 59 or seconds > 59:
        return None
    return time(hours, minutes, seconds)


def to_minutes(value: TimeValue) -> Optional[int]:
    """Minutes since local midnight, or None when the value is unparsable."""
    t = parse_clock(value)
    if t is None:
        return None
    return t.hour * 60 + t.minute


def format_clock_12h(value: TimeValue) -> str:
    """Display form used by the portal, e.g. ``08:30 AM``; ``-`` when missing."""
    t = parse_clock(value)
    if t is None:
        return "-"
    return t.strftime("%I:%M %p")


def format_minutes(total_minutes: int) -> str:
    """Format a minute count as ``HH:MM``."""
    total_minutes = int(total_minutes)
    return f"{total_minutes // 60:02d}:{total_minutes % 60:02d}"


def to_business_naive(moment: datetime) -> datetime:
    """Wall-clock reading of ``moment`` in the business timezone, without tzinfo.

    Naive datetimes are taken to already be business-local.
    """
    if moment.tzinfo is None:
        return moment
    return moment.astimezone(business_tz()).replace(tzinfo=None)


def clock_from_minutes(minutes: int) -> time:
    return time(int(minutes) // 60, int(minutes) % 60)
