from __future__ import annotations

from dataclasses import dataclass, replace
from typing import FrozenSet, Mapping, Optional, Sequence

from .accounts.repository import AccountRepository
from .attendance.model import AttendanceSession, recount
from .attendance.repository import AttendanceRepository
from .classes.model import SchoolClass
from .classes.repository import ClassRepository
from .core.exceptions import NotFoundError
from .students.model import Student
from .students.repository import StudentRepository
from .subjects.model import Subject
from .subjects.repository import SubjectRepository


@dataclass(frozen=True)
class Repositories:
    accounts: AccountRepository
    classes: ClassRepository
    students: StudentRepository
    subjects: SubjectRepository
    attendance: AttendanceRepository


class DataStore:
    """Entry point to storage. Services never touch the repositories directly;
    they ask for an :class:`OwnerScope` bound to the authenticated account."""

    def __init__(self, repos: Repositories):
        self._repos = repos

    def for_owner(self, owner_id: int) -> "OwnerScope":
        return OwnerScope(int(owner_id), self._repos)


class OwnerScope:
    """Every read and write of one account's data.

    The owner id is pinned here once; no method accepts an owner id from its
    caller, so a query cannot leak across accounts.
    """

    def __init__(self, owner_id: int, repos: Repositories):
        self._owner_id = owner_id
        self._repos = repos

    @property
    def owner_id(self) -> int:
        return self._owner_id

    # classes
    def list_classes(self) -> Sequence[SchoolClass]:
        return self._repos.classes.list_for_owner(self._owner_id)

    def find_class(self, class_id: int) -> Optional[SchoolClass]:
        return self._repos.classes.get(self._owner_id, class_id)

    def create_class(self, name: str) -> SchoolClass:
        class_id = self._repos.classes.create(owner_id=self._owner_id, name=name)
        return SchoolClass(class_id=class_id, owner_id=self._owner_id, name=name)

    def delete_class(self, class_id: int) -> bool:
        return self._repos.classes.delete(self._owner_id, class_id)

    # students
    def list_students(self, class_id: Optional[int] = None) -> Sequence[Student]:
        if class_id is None:
            return self._repos.students.list_for_owner(self._owner_id)
        return self._repos.students.list_for_class(self._owner_id, class_id)

    def find_student(self, student_id: int) -> Optional[Student]:
        return self._repos.students.get(self._owner_id, student_id)

    def create_student(self, *, class_id: int, name: str) -> Student:
        student_id = self._repos.students.create(owner_id=self._owner_id, class_id=class_id, name=name)
        return Student(student_id=student_id, owner_id=self._owner_id, class_id=class_id, name=name)

    def delete_student(self, student_id: int) -> bool:
        return self._repos.students.delete(self._owner_id, student_id)

    def delete_students_of_class(self, class_id: int) -> int:
        return self._repos.students.delete_for_class(self._owner_id, class_id)

    # subjects
    def list_subjects(self) -> Sequence[Subject]:
        return self._repos.subjects.list_for_owner(self._owner_id)

    def find_subject(self, subject_id: int) -> Optional[Subject]:
        return self._repos.subjects.get(self._owner_id, subject_id)

    def create_subject(self, name: str) -> Subject:
        subject_id = self._repos.subjects.create(owner_id=self._owner_id, name=name)
        return Subject(subject_id=subject_id, owner_id=self._owner_id, name=name)

    def update_subject_links(
        self,
        subject_id: int,
        *,
        assigned_classes: Sequence[str],
        exclusions: Mapping[str, FrozenSet[int]],
    ) -> bool:
        return self._repos.subjects.update_links(
            self._owner_id,
            subject_id,
            assigned_classes=assigned_classes,
            exclusions=exclusions,
        )

    def delete_subject(self, subject_id: int) -> bool:
        return self._repos.subjects.delete(self._owner_id, subject_id)

    # attendance sessions
    def find_sessions(
        self,
        *,
        class_id: Optional[int] = None,
        subject_id: Optional[int] = None,
        student_id: Optional[int] = None,
        require_records: bool = False,
    ) -> Sequence[AttendanceSession]:
        return self._repos.attendance.find_sessions(
            self._owner_id,
            class_id=class_id,
            subject_id=subject_id,
            student_id=student_id,
            require_records=require_records,
        )

    def save_session(self, session: AttendanceSession) -> AttendanceSession:
        """Persist ``session`` under this owner with freshly derived counts."""

        # recount raises before anything reaches the repository
        to_store = recount(replace(session, owner_id=self._owner_id))
        session_id = self._repos.attendance.save_session(to_store)
        if not session_id:
            raise NotFoundError("Attendance session not found")
        return replace(to_store, session_id=session_id)

    def delete_session(self, session_id: int) -> bool:
        return self._repos.attendance.delete_session(self._owner_id, session_id)

    def delete_sessions_of_class(self, class_id: int) -> int:
        return self._repos.attendance.delete_for_class(self._owner_id, class_id)
