"""Constants and defaults.

Note: Keep constants here to avoid magic numbers spread across code.
All clock boundaries are minutes since local midnight in the business timezone.
"""

import os


def hm(hour: int, minute: int = 0) -> int:
    return hour * 60 + minute


BUSINESS_UTC_OFFSET_HOURS = int(os.getenv("BUSINESS_UTC_OFFSET_HOURS", "8"))

# Session classification (see attendance.classifier)
AFTERNOON_FROM = hm(12)
OVERTIME_FROM = hm(18)

# Morning
MORNING_COUNT_START = hm(8)
MORNING_BASELINE = hm(8, 5)
MORNING_VERY_LATE = hm(9)
MORNING_CHECKIN_FROM = hm(5)
MORNING_CHECKIN_UNTIL = hm(12)
MORNING_CHECKOUT_FROM = hm(12)
MORNING_END_CAP = hm(12)

# Afternoon
AFTERNOON_BASELINE = hm(13)
AFTERNOON_LATE_THRESHOLD = hm(13, 5)
AFTERNOON_CHECKIN_FROM = hm(12, 40)
AFTERNOON_CHECKIN_UNTIL = hm(17)
AFTERNOON_CHECKOUT_FROM = hm(17)
AFTERNOON_END_CAP = hm(17)

# Overtime
OVERTIME_COUNT_START = hm(19)
OVERTIME_CHECKIN_FROM = hm(18, 50)
OVERTIME_CHECKIN_UNTIL = hm(22)
OVERTIME_CHECKOUT_FROM = hm(22)
OVERTIME_END_CAP = hm(22)

# Deductions (whole hours)
LATE_DEDUCTION_HOURS = 1
VERY_LATE_DEDUCTION_HOURS = 2

MAX_ORDINARY_CHECKINS_PER_DAY = 2

DEFAULT_HISTORY_LIMIT = 30
DEFAULT_REPORT_DAYS = 7
