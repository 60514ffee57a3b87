from __future__ import annotations

import logging
from typing import Any, Sequence

from ..attendance.pruning import strip_student
from ..common.validators import require_id, require_non_empty
from ..core.exceptions import NotFoundError
from ..scope import DataStore
from .model import SchoolClass

logger = logging.getLogger(__name__)


class ClassService:
    """Use cases: list, create and delete classes."""

    def __init__(self, store: DataStore):
        self._store = store

    def list_classes(self, owner_id: int) -> Sequence[SchoolClass]:
        return self._store.for_owner(owner_id).list_classes()

    def create_class(self, owner_id: int, *, name: Any) -> SchoolClass:
        name = require_non_empty(name, "Class name")
        return self._store.for_owner(owner_id).create_class(name)

    def delete_class(self, owner_id: int, class_id: Any) -> None:
        """Delete a class together with its sessions and students.

        Runs as ordered steps, dependants first. Each step is idempotent, so a
        failed call can simply be repeated: until the last step succeeds the
        class itself is still there to retry against.
        """

        class_id = require_id(class_id, "classId")
        scope = self._store.for_owner(owner_id)
        if scope.find_class(class_id) is None:
            raise NotFoundError("Class not found or not owned by you")

        removed_sessions = scope.delete_sessions_of_class(class_id)

        # sessions of other classes may still hold records of these students
        stripped = 0
        for student in scope.list_students(class_id):
            stripped += strip_student(scope, student.student_id)

        removed_students = scope.delete_students_of_class(class_id)
        scope.delete_class(class_id)

        logger.info(
            "deleted class %s (owner=%s): sessions=%s students=%s stripped_sessions=%s",
            class_id,
            owner_id,
            removed_sessions,
            removed_students,
            stripped,
        )
