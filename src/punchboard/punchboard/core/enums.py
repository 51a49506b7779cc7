from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Attendance status values stored in the database."""

    PRESENT = "present"
    ABSENT = "absent"
    LATE = "late"
    HALF_DAY = "half-day"


class PunchAction(str, Enum):
    """Which half of the daily cycle a punch resolved to."""

    PUNCH_IN = "punch-in"
    PUNCH_OUT = "punch-out"


class PunchState(str, Enum):
    """Where an employee stands in today's in/out cycle."""

    NO_RECORD = "no-record"
    PUNCHED_IN = "punched-in"
    PUNCHED_OUT = "punched-out"
