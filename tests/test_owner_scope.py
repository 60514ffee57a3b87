from __future__ import annotations

from datetime import date

import pytest

from src.attendance_tracker.attendance_tracker.attendance.model import AttendanceSession, RollCallEntry
from src.attendance_tracker.attendance_tracker.core.enums import AttendanceMark
from src.attendance_tracker.attendance_tracker.core.exceptions import NotFoundError


def test_reads_only_return_the_owners_rows(store, repos, school, add_session):
    repos.classes.create(owner_id=2, name="12C")
    add_session(school["class"], school["math"], (school["alice"], "present"))

    mine = store.for_owner(1)
    theirs = store.for_owner(2)

    assert [c.name for c in mine.list_classes()] == ["10A"]
    assert [c.name for c in theirs.list_classes()] == ["12C"]
    assert theirs.list_students() == []
    assert theirs.list_subjects() == []
    assert theirs.find_sessions() == []
    assert theirs.find_class(school["class"]) is None
    assert theirs.find_student(school["alice"]) is None
    assert theirs.find_subject(school["math"]) is None


def test_writes_cannot_reach_another_owner(store, repos, school, add_session):
    session = add_session(school["class"], school["math"], (school["alice"], "present"))
    theirs = store.for_owner(2)

    assert theirs.delete_class(school["class"]) is False
    assert theirs.delete_student(school["alice"]) is False
    assert theirs.delete_subject(school["math"]) is False
    assert theirs.delete_session(session.session_id) is False
    assert theirs.delete_students_of_class(school["class"]) == 0
    assert theirs.delete_sessions_of_class(school["class"]) == 0
    assert theirs.update_subject_links(school["math"], assigned_classes=[], exclusions={}) is False

    assert len(repos.students.rows) == 3
    assert repos.attendance.rows[session.session_id] == session


def test_saving_a_foreign_session_is_refused(store, repos, school, add_session):
    session = add_session(school["class"], school["math"], (school["alice"], "present"))
    hijack = session.without_student(school["alice"])

    with pytest.raises(NotFoundError):
        store.for_owner(2).save_session(hijack)

    assert repos.attendance.rows[session.session_id].records == session.records


def test_save_pins_owner_and_derives_counts(store, repos):
    draft = AttendanceSession(
        owner_id=99,
        class_id=1,
        subject_id=1,
        session_date=date(2025, 3, 3),
        records=(
            RollCallEntry(student_id=1, status=AttendanceMark.ABSENT),
            RollCallEntry(student_id=2, status=AttendanceMark.ABSENT),
        ),
        present_count=5,
    )

    saved = store.for_owner(4).save_session(draft)

    assert saved.owner_id == 4
    assert (saved.present_count, saved.absent_count) == (0, 2)
    assert repos.attendance.rows[saved.session_id] == saved
