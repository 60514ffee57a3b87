from __future__ import annotations

import logging
from typing import Any, List

from ..attendance.pruning import strip_student
from ..common.validators import optional_id, require_id, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..scope import DataStore
from .eligibility import EligibilityFilter
from .model import Student

logger = logging.getLogger(__name__)


class StudentService:
    """Use cases: list eligible students, add students, delete or drop them."""

    def __init__(self, store: DataStore):
        self._store = store

    def list_students(self, owner_id: int, *, class_id: Any, subject_id: Any = None) -> List[Student]:
        class_id = require_id(class_id, "classId")
        subject_id = optional_id(subject_id, "subjectId")
        return EligibilityFilter(self._store.for_owner(owner_id)).eligible_students(class_id, subject_id)

    def create_student(self, owner_id: int, *, name: Any, class_id: Any) -> Student:
        name = require_non_empty(name, "Name")
        class_id = require_id(class_id, "classId")

        scope = self._store.for_owner(owner_id)
        if scope.find_class(class_id) is None:
            raise NotFoundError("Class not found or not owned by you")
        return scope.create_student(class_id=class_id, name=name)

    def delete_student(self, owner_id: int, student_id: Any) -> int:
        """Remove the student and every record they have in any session.

        Returns the number of sessions touched.
        """

        student_id = require_id(student_id, "studentId")
        scope = self._store.for_owner(owner_id)
        if scope.find_student(student_id) is None:
            raise NotFoundError("Student not found or not owned by you")

        touched = strip_student(scope, student_id)
        scope.delete_student(student_id)
        logger.info("deleted student %s (owner=%s), sessions touched=%s", student_id, owner_id, touched)
        return touched

    def drop_from_subject(self, owner_id: int, student_id: Any, *, subject_id: Any, class_id: Any) -> int:
        """Strip the student's records from one subject+class pair only.

        The student entity and their other sessions stay untouched.
        """

        student_id = require_id(student_id, "studentId")
        subject_id = require_id(subject_id, "subjectId")
        class_id = require_id(class_id, "classId")

        scope = self._store.for_owner(owner_id)
        if scope.find_student(student_id) is None:
            raise NotFoundError("Student not found or not owned by you")

        touched = strip_student(scope, student_id, class_id=class_id, subject_id=subject_id)
        logger.info(
            "dropped student %s from subject %s / class %s (owner=%s), sessions touched=%s",
            student_id,
            subject_id,
            class_id,
            owner_id,
            touched,
        )
        return touched

    def remove(self, owner_id: int, student_id: Any, *, subject_id: Any = None, class_id: Any = None) -> int:
        """Full delete without a scope, scoped drop when both ids are given."""

        has_subject = optional_id(subject_id, "subjectId") is not None
        has_class = optional_id(class_id, "classId") is not None
        if has_subject != has_class:
            raise ValidationError("subjectId and classId must be given together")
        if has_subject:
            return self.drop_from_subject(owner_id, student_id, subject_id=subject_id, class_id=class_id)
        return self.delete_student(owner_id, student_id)
