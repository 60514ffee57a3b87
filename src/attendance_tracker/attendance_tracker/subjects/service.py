from __future__ import annotations

import logging
from typing import Any, Dict, FrozenSet, List, Sequence

from ..common.validators import require_id, require_non_empty
from ..core.exceptions import NotFoundError, ValidationError
from ..scope import DataStore
from .model import Subject

logger = logging.getLogger(__name__)


class SubjectService:
    """Use cases: manage subjects, their class assignments and exclusion lists."""

    def __init__(self, store: DataStore):
        self._store = store

    def list_subjects(self, owner_id: int) -> Sequence[Subject]:
        return self._store.for_owner(owner_id).list_subjects()

    def get_subject(self, owner_id: int, subject_id: Any) -> Subject:
        subject_id = require_id(subject_id, "subjectId")
        subject = self._store.for_owner(owner_id).find_subject(subject_id)
        if subject is None:
            raise NotFoundError("Subject not found or not owned by you")
        return subject

    def create_subject(self, owner_id: int, *, name: Any) -> Subject:
        name = require_non_empty(name, "Subject name")
        return self._store.for_owner(owner_id).create_subject(name)

    def update_links(
        self,
        owner_id: int,
        subject_id: Any,
        *,
        assigned_classes: Any = None,
        excluded_students: Any = None,
    ) -> Subject:
        """Replace assignments and exclusions.

        ``excluded_students`` uses the wire shape ``[{className, studentIds}]``;
        entries for the same class name are merged.
        """

        subject_id = require_id(subject_id, "subjectId")
        assigned = self._parse_assigned(assigned_classes)
        exclusions = self._parse_exclusions(excluded_students)

        scope = self._store.for_owner(owner_id)
        if not scope.update_subject_links(subject_id, assigned_classes=assigned, exclusions=exclusions):
            raise NotFoundError("Subject not found or not owned by you")
        return self.get_subject(owner_id, subject_id)

    def delete_subject(self, owner_id: int, subject_id: Any) -> None:
        subject_id = require_id(subject_id, "subjectId")
        if not self._store.for_owner(owner_id).delete_subject(subject_id):
            raise NotFoundError("Subject not found or not owned by you")
        logger.info("deleted subject %s (owner=%s)", subject_id, owner_id)

    @staticmethod
    def _parse_assigned(value: Any) -> List[str]:
        if value is None:
            return []
        if not isinstance(value, list):
            raise ValidationError("assignedClasses must be a list of class names")

        names: List[str] = []
        for item in value:
            name = require_non_empty(item, "Class name")
            if name not in names:
                names.append(name)
        return names

    @staticmethod
    def _parse_exclusions(value: Any) -> Dict[str, FrozenSet[int]]:
        if value is None:
            return {}
        if not isinstance(value, list):
            raise ValidationError("excludedStudents must be a list")

        merged: Dict[str, set] = {}
        for entry in value:
            if not isinstance(entry, dict):
                raise ValidationError("excludedStudents entries must be objects")
            class_name = require_non_empty(entry.get("className"), "className")
            student_ids = entry.get("studentIds") or []
            if not isinstance(student_ids, list):
                raise ValidationError("studentIds must be a list")
            bucket = merged.setdefault(class_name, set())
            for raw in student_ids:
                bucket.add(require_id(raw, "studentId"))
        return {name: frozenset(ids) for name, ids in merged.items()}
