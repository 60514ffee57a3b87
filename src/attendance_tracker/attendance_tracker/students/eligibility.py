from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..scope import OwnerScope
from .model import Student

logger = logging.getLogger(__name__)


class EligibilityFilter:
    """Decides which students of a class are shown for taking attendance.

    Without a subject every student of the class is eligible. With a subject
    two narrowing steps run in order:

    1. exclusions: students listed in the subject's exclusion entry for the
       class *name* are removed;
    2. history: once any session of this subject+class holds a record, only
       students appearing in such sessions remain. Before the first roll call
       nobody is removed by this step.

    A missing subject means no exclusions. A missing class skips step 1 only.
    """

    def __init__(self, scope: OwnerScope):
        self._scope = scope

    def eligible_students(self, class_id: int, subject_id: Optional[int] = None) -> List[Student]:
        students = list(self._scope.list_students(class_id))
        if subject_id is None:
            return students

        students = self._apply_exclusions(students, class_id=class_id, subject_id=subject_id)
        return self._apply_history(students, class_id=class_id, subject_id=subject_id)

    def _apply_exclusions(self, students: Sequence[Student], *, class_id: int, subject_id: int) -> List[Student]:
        school_class = self._scope.find_class(class_id)
        subject = self._scope.find_subject(subject_id)
        if school_class is None or subject is None:
            logger.debug(
                "exclusions skipped for class=%s subject=%s (class found=%s, subject found=%s)",
                class_id,
                subject_id,
                school_class is not None,
                subject is not None,
            )
            return list(students)

        excluded = subject.excluded_for(school_class.name)
        return [s for s in students if s.student_id not in excluded]

    def _apply_history(self, students: Sequence[Student], *, class_id: int, subject_id: int) -> List[Student]:
        seen: set[int] = set()
        for session in self._scope.find_sessions(class_id=class_id, subject_id=subject_id, require_records=True):
            seen.update(session.student_ids())

        if not seen:
            return list(students)
        return [s for s in students if s.student_id in seen]
