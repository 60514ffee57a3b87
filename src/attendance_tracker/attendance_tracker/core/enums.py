from __future__ import annotations

from enum import Enum


class AttendanceMark(str, Enum):
    """Roll-call status of one student in one session."""

    PRESENT = "present"
    ABSENT = "absent"
