from __future__ import annotations

import pytest

from src.attendance_tracker.attendance_tracker.core.exceptions import NotFoundError, ValidationError
from src.attendance_tracker.attendance_tracker.subjects.service import SubjectService


def test_update_links_replaces_and_merges(store, school):
    svc = SubjectService(store)

    updated = svc.update_links(
        school["owner"],
        str(school["math"]),
        assigned_classes=["10A", "10B", "10A"],
        excluded_students=[
            {"className": "10A", "studentIds": [school["bob"]]},
            {"className": "10A", "studentIds": [str(school["carol"]), school["bob"]]},
            {"className": "10B", "studentIds": []},
        ],
    )

    assert updated.assigned_classes == ("10A", "10B")
    assert updated.excluded_for("10A") == {school["bob"], school["carol"]}
    assert updated.as_dict()["excludedStudents"] == [
        {"className": "10A", "studentIds": sorted([school["bob"], school["carol"]])},
        {"className": "10B", "studentIds": []},
    ]


def test_update_links_with_nothing_clears_everything(store, school):
    svc = SubjectService(store)
    svc.update_links(
        school["owner"], school["math"], excluded_students=[{"className": "10A", "studentIds": [school["bob"]]}]
    )

    cleared = svc.update_links(school["owner"], school["math"])

    assert cleared.assigned_classes == ()
    assert cleared.excluded_for("10A") == frozenset()


@pytest.mark.parametrize(
    "kwargs",
    [
        {"assigned_classes": "10A"},
        {"assigned_classes": [""]},
        {"excluded_students": {"className": "10A"}},
        {"excluded_students": ["10A"]},
        {"excluded_students": [{"studentIds": [1]}]},
        {"excluded_students": [{"className": "10A", "studentIds": "1"}]},
        {"excluded_students": [{"className": "10A", "studentIds": ["x"]}]},
    ],
)
def test_update_links_rejects_malformed_payloads(store, school, kwargs):
    with pytest.raises(ValidationError):
        SubjectService(store).update_links(school["owner"], school["math"], **kwargs)


def test_subject_lookups_are_owner_scoped(store, repos, school):
    svc = SubjectService(store)

    with pytest.raises(NotFoundError):
        svc.get_subject(2, school["math"])
    with pytest.raises(NotFoundError):
        svc.update_links(2, school["math"], assigned_classes=["X"])
    with pytest.raises(NotFoundError):
        svc.delete_subject(2, school["math"])

    assert repos.subjects.rows[school["math"]].assigned_classes == ("10A",)


def test_delete_subject_keeps_its_sessions(store, repos, school, add_session):
    session = add_session(school["class"], school["math"], (school["alice"], "present"))

    SubjectService(store).delete_subject(school["owner"], school["math"])

    assert repos.subjects.rows == {}
    assert session.session_id in repos.attendance.rows


def test_create_subject(store):
    created = SubjectService(store).create_subject(3, name="Chemistry")

    assert created.owner_id == 3
    assert created.as_dict()["assignedClasses"] == []
    with pytest.raises(ValidationError):
        SubjectService(store).create_subject(3, name=None)
