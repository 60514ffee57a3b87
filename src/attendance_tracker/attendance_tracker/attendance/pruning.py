from __future__ import annotations

from typing import Optional

from ..scope import OwnerScope


def strip_student(
    scope: OwnerScope,
    student_id: int,
    *,
    class_id: Optional[int] = None,
    subject_id: Optional[int] = None,
) -> int:
    """Remove a student's records from sessions, optionally limited to one
    class and/or subject. Sessions left without records are deleted.

    Returns the number of sessions touched. Safe to run again after a partial
    failure: already stripped sessions no longer match.
    """

    touched = 0
    for session in scope.find_sessions(class_id=class_id, subject_id=subject_id, student_id=student_id):
        remaining = session.without_student(student_id)
        if remaining.records:
            scope.save_session(remaining)
        else:
            scope.delete_session(session.session_id)
        touched += 1
    return touched
