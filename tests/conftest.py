from __future__ import annotations

import os
from dataclasses import replace
from datetime import date
from itertools import count
from typing import Dict, Optional

import pytest

os.environ.setdefault("APP_ENV", "testing")

from src.attendance_tracker.attendance_tracker.accounts.model import Account
from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceSession, RollCallEntry
from src.attendance_tracker.attendance_tracker.classes.model import SchoolClass
from src.attendance_tracker.attendance_tracker.container import assemble_container
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceMark
from src.attendance_tracker.attendance_tracker.scope import DataStore, Repositories
from src.attendance_tracker.attendance_tracker.students.model import Student
from src.attendance_tracker.attendance_tracker.subjects.model import Subject


class InMemoryAccounts:
    def __init__(self):
        self._ids = count(1)
        self.rows: Dict[int, Account] = {}

    def get_by_login_id(self, login_id):
        return next((a for a in self.rows.values() if a.login_id == login_id), None)

    def create_account(self, *, login_id, username, password_hash):
        account_id = next(self._ids)
        self.rows[account_id] = Account(account_id, login_id, username, password_hash)
        return account_id


class InMemoryClasses:
    def __init__(self):
        self._ids = count(1)
        self.rows: Dict[int, SchoolClass] = {}

    def list_for_owner(self, owner_id):
        return [c for c in self.rows.values() if c.owner_id == owner_id]

    def get(self, owner_id, class_id):
        c = self.rows.get(class_id)
        return c if c and c.owner_id == owner_id else None

    def create(self, *, owner_id, name):
        class_id = next(self._ids)
        self.rows[class_id] = SchoolClass(class_id=class_id, owner_id=owner_id, name=name)
        return class_id

    def delete(self, owner_id, class_id):
        if self.get(owner_id, class_id) is None:
            return False
        del self.rows[class_id]
        return True


class InMemoryStudents:
    def __init__(self):
        self._ids = count(1)
        self.rows: Dict[int, Student] = {}

    def list_for_owner(self, owner_id):
        return [s for s in self.rows.values() if s.owner_id == owner_id]

    def list_for_class(self, owner_id, class_id):
        return [s for s in self.rows.values() if s.owner_id == owner_id and s.class_id == class_id]

    def get(self, owner_id, student_id):
        s = self.rows.get(student_id)
        return s if s and s.owner_id == owner_id else None

    def create(self, *, owner_id, class_id, name):
        student_id = next(self._ids)
        self.rows[student_id] = Student(student_id=student_id, owner_id=owner_id, class_id=class_id, name=name)
        return student_id

    def delete(self, owner_id, student_id):
        if self.get(owner_id, student_id) is None:
            return False
        del self.rows[student_id]
        return True

    def delete_for_class(self, owner_id, class_id):
        doomed = [s.student_id for s in self.list_for_class(owner_id, class_id)]
        for student_id in doomed:
            del self.rows[student_id]
        return len(doomed)


class InMemorySubjects:
    def __init__(self):
        self._ids = count(1)
        self.rows: Dict[int, Subject] = {}

    def list_for_owner(self, owner_id):
        return [s for s in self.rows.values() if s.owner_id == owner_id]

    def get(self, owner_id, subject_id):
        s = self.rows.get(subject_id)
        return s if s and s.owner_id == owner_id else None

    def create(self, *, owner_id, name):
        subject_id = next(self._ids)
        self.rows[subject_id] = Subject(subject_id=subject_id, owner_id=owner_id, name=name)
        return subject_id

    def update_links(self, owner_id, subject_id, *, assigned_classes, exclusions):
        current = self.get(owner_id, subject_id)
        if current is None:
            return False
        self.rows[subject_id] = replace(
            current,
            assigned_classes=tuple(assigned_classes),
            exclusions=dict(exclusions),
        )
        return True

    def delete(self, owner_id, subject_id):
        if self.get(owner_id, subject_id) is None:
            return False
        del self.rows[subject_id]
        return True


class InMemoryAttendance:
    def __init__(self):
        self._ids = count(1)
        self.rows: Dict[int, AttendanceSession] = {}
        self.saved: list[AttendanceSession] = []

    def find_sessions(self, owner_id, *, class_id=None, subject_id=None, student_id=None, require_records=False):
        out = []
        for s in self.rows.values():
            if s.owner_id != owner_id:
                continue
            if class_id is not None and s.class_id != class_id:
                continue
            if subject_id is not None and s.subject_id != subject_id:
                continue
            if student_id is not None and student_id not in s.student_ids():
                continue
            if require_records and not s.records:
                continue
            out.append(s)
        return sorted(out, key=lambda s: (s.session_date, s.session_id))

    def save_session(self, session):
        self.saved.append(session)
        if session.session_id is None:
            session_id = next(self._ids)
        else:
            existing = self.rows.get(session.session_id)
            if existing is None or existing.owner_id != session.owner_id:
                return 0
            session_id = session.session_id
        self.rows[session_id] = replace(session, session_id=session_id)
        return session_id

    def delete_session(self, owner_id, session_id):
        s = self.rows.get(session_id)
        if s is None or s.owner_id != owner_id:
            return False
        del self.rows[session_id]
        return True

    def delete_for_class(self, owner_id, class_id):
        doomed = [sid for sid, s in self.rows.items() if s.owner_id == owner_id and s.class_id == class_id]
        for sid in doomed:
            del self.rows[sid]
        return len(doomed)


@pytest.fixture
def repos() -> Repositories:
    return Repositories(
        accounts=InMemoryAccounts(),
        classes=InMemoryClasses(),
        students=InMemoryStudents(),
        subjects=InMemorySubjects(),
        attendance=InMemoryAttendance(),
    )


@pytest.fixture
def store(repos) -> DataStore:
    return DataStore(repos)


@pytest.fixture
def container(repos):
    return assemble_container(repos, jwt_secret="test-jwt-secret", token_ttl_minutes=60)


@pytest.fixture
def school(repos):
    """Owner 1: class 10A with Alice, Bob, Carol; subject Math assigned to 10A."""

    class_id = repos.classes.create(owner_id=1, name="10A")
    alice = repos.students.create(owner_id=1, class_id=class_id, name="Alice")
    bob = repos.students.create(owner_id=1, class_id=class_id, name="Bob")
    carol = repos.students.create(owner_id=1, class_id=class_id, name="Carol")
    math = repos.subjects.create(owner_id=1, name="Math")
    repos.subjects.update_links(1, math, assigned_classes=["10A"], exclusions={})
    return {"owner": 1, "class": class_id, "alice": alice, "bob": bob, "carol": carol, "math": math}


@pytest.fixture
def add_session(repos):
    """Store a session straight into the fake, bypassing the service layer.

    ``add_session(class_id, subject_id, (student_id, "present"), ...)``
    """

    def _add(class_id: int, subject_id: int, *pairs, owner_id: int = 1, on: Optional[date] = None):
        session_id = repos.attendance.save_session(
            AttendanceSession(
                owner_id=owner_id,
                class_id=class_id,
                subject_id=subject_id,
                session_date=on or date(2025, 1, 6),
                records=tuple(RollCallEntry(student_id=sid, status=AttendanceMark(status)) for sid, status in pairs),
            )
        )
        return repos.attendance.rows[session_id]

    return _add
