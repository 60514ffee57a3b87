from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import AttendanceSession


class AttendanceRepository(Protocol):
    def find_sessions(
        self,
        owner_id: int,
        *,
        class_id: Optional[int] = None,
        subject_id: Optional[int] = None,
        student_id: Optional[int] = None,
        require_records: bool = False,
    ) -> Sequence[AttendanceSession]:
        """Sessions of one owner ordered by (date, id).

        ``student_id`` keeps sessions holding a record for that student;
        ``require_records`` drops sessions without any record.
        """

        raise NotImplementedError

    def save_session(self, session: AttendanceSession) -> int:
        """Insert (``session_id`` is None) or replace a session with its records."""

        raise NotImplementedError

    def delete_session(self, owner_id: int, session_id: int) -> bool:
        raise NotImplementedError

    def delete_for_class(self, owner_id: int, class_id: int) -> int:
        raise NotImplementedError
