from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional, Tuple

from ..core.enums import AttendanceMark
from ..core.exceptions import ValidationError


@dataclass(frozen=True)
class RollCallEntry:
    """One line of a roll call: a student and their mark."""

    student_id: int
    status: AttendanceMark

    def as_dict(self) -> dict:
        return {"studentId": self.student_id, "status": self.status.value}


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: one roll call taken for one class + subject + date.

    ``present_count`` / ``absent_count`` are derived from ``records``; they are
    only ever set by :func:`recount`.
    """

    owner_id: int
    class_id: int
    subject_id: int
    session_date: date
    records: Tuple[RollCallEntry, ...] = ()
    session_id: Optional[int] = None
    present_count: int = 0
    absent_count: int = 0

    def student_ids(self) -> set[int]:
        return {entry.student_id for entry in self.records}

    def without_student(self, student_id: int) -> "AttendanceSession":
        return replace(self, records=tuple(e for e in self.records if e.student_id != student_id))

    def as_dict(self) -> dict:
        return {
            "id": self.session_id,
            "classId": self.class_id,
            "subjectId": self.subject_id,
            "date": self.session_date.isoformat(),
            "records": [entry.as_dict() for entry in self.records],
            "presentCount": self.present_count,
            "absentCount": self.absent_count,
        }


def recount(session: AttendanceSession) -> AttendanceSession:
    """Return ``session`` with its derived counts recomputed from ``records``.

    Raises ValidationError on an unknown mark so that nothing gets written.
    """

    present = 0
    absent = 0
    for entry in session.records:
        if entry.status is AttendanceMark.PRESENT:
            present += 1
        elif entry.status is AttendanceMark.ABSENT:
            absent += 1
        else:
            raise ValidationError(f"Unknown attendance status: {entry.status!r}")
    return replace(session, present_count=present, absent_count=absent)
