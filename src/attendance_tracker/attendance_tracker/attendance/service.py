from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Any, List, Optional, Tuple

from ..common.datetime_utils import now_local, parse_iso_date
from ..common.validators import optional_id, require_id
from ..core.enums import AttendanceMark
from ..core.exceptions import NotFoundError, ValidationError
from ..scope import DataStore, OwnerScope
from .aggregation import NameDirectory, expand_sessions, student_records, subject_records
from .model import AttendanceSession, RollCallEntry

logger = logging.getLogger(__name__)


class AttendanceService:
    """Use cases: take a roll call and read the attendance statistics."""

    def __init__(self, store: DataStore):
        self._store = store

    def record_session(
        self,
        owner_id: int,
        *,
        class_id: Any,
        subject_id: Any,
        records: Any,
        session_date: Any = None,
    ) -> AttendanceSession:
        class_id = require_id(class_id, "classId")
        subject_id = require_id(subject_id, "subjectId")
        if not isinstance(records, list):
            raise ValidationError("classId, subjectId, and records array are required")
        entries = self._parse_entries(records)
        taken_on = self._parse_date(session_date)

        scope = self._store.for_owner(owner_id)
        if scope.find_class(class_id) is None:
            raise NotFoundError("Class not found or not owned by you")
        if scope.find_subject(subject_id) is None:
            raise NotFoundError("Subject not found or not owned by you")

        roster = {s.student_id for s in scope.list_students(class_id)}
        strangers = sorted({e.student_id for e in entries} - roster)
        if strangers:
            raise ValidationError(f"Students not in this class: {', '.join(map(str, strangers))}")

        saved = scope.save_session(
            AttendanceSession(
                owner_id=owner_id,
                class_id=class_id,
                subject_id=subject_id,
                session_date=taken_on,
                records=entries,
            )
        )
        logger.info(
            "recorded session %s class=%s subject=%s present=%s absent=%s",
            saved.session_id,
            class_id,
            subject_id,
            saved.present_count,
            saved.absent_count,
        )
        return saved

    def overview(self, owner_id: int) -> dict:
        """Every session of the owner with references resolved, plus per-class stats."""

        scope = self._store.for_owner(owner_id)
        sessions = scope.find_sessions()
        classes = {c.class_id: c for c in scope.list_classes()}
        subjects = {s.subject_id: s for s in scope.list_subjects()}
        students = {s.student_id: s for s in scope.list_students()}

        names = NameDirectory.from_entities(
            classes=classes.values(),
            students=students.values(),
            subjects=subjects.values(),
        )
        return {
            "records": expand_sessions(sessions, classes=classes, subjects=subjects, students=students),
            "aggregatedStats": student_records(sessions, names),
        }

    def student_records(self, owner_id: int, *, class_id: Any = None, subject_id: Any = None) -> List[dict]:
        scope, sessions = self._scoped_sessions(owner_id, class_id=class_id, subject_id=subject_id)
        names = NameDirectory.from_entities(classes=scope.list_classes(), students=scope.list_students())
        return student_records(sessions, names)

    def subject_records(self, owner_id: int, *, class_id: Any = None, subject_id: Any = None) -> List[dict]:
        scope, sessions = self._scoped_sessions(owner_id, class_id=class_id, subject_id=subject_id)
        names = NameDirectory.from_entities(
            classes=scope.list_classes(),
            students=scope.list_students(),
            subjects=scope.list_subjects(),
        )
        return subject_records(sessions, names)

    def _scoped_sessions(self, owner_id: int, *, class_id: Any, subject_id: Any) -> Tuple[OwnerScope, list]:
        class_id = optional_id(class_id, "classId")
        subject_id = optional_id(subject_id, "subjectId")
        scope = self._store.for_owner(owner_id)
        return scope, list(scope.find_sessions(class_id=class_id, subject_id=subject_id))

    @staticmethod
    def _parse_entries(records: list) -> Tuple[RollCallEntry, ...]:
        entries = []
        for raw in records:
            if not isinstance(raw, dict):
                raise ValidationError("Each record needs studentId and status")
            student_id = require_id(raw.get("studentId"), "studentId")
            try:
                status = AttendanceMark(raw.get("status"))
            except ValueError:
                raise ValidationError("status must be 'present' or 'absent'")
            if any(e.student_id == student_id for e in entries):
                raise ValidationError(f"Student {student_id} appears more than once")
            entries.append(RollCallEntry(student_id=student_id, status=status))
        return tuple(entries)

    @staticmethod
    def _parse_date(value: Optional[Any]) -> date:
        if value is None or value == "":
            return now_local().date()
        if isinstance(value, datetime):
            return value.date()
        if isinstance(value, date):
            return value
        return parse_iso_date(str(value)[:10])
