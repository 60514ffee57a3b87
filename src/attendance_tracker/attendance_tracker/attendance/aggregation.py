"""Attendance roll-ups.

Pure functions over a snapshot of sessions, run as an explicit pipeline:

1. ``tally_marks`` walks every record once and builds an insertion-ordered
   mapping from a composite key to present/absent counts;
2. fold passes turn that mapping into the nested per-class and per-subject
   views.

Groups are emitted in first-seen order (sessions arrive ordered by date then
id, records in roll-call order). Display names are looked up by id in the
current entities; a deleted class, student or subject yields ``None`` but the
counts are still reported. The label attached to a group is the one seen when
the group is created, i.e. the first processed record wins.

The stored per-session counts are never read here: everything is recomputed
from ``records``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Mapping, NamedTuple, Optional

from ..classes.model import SchoolClass
from ..core.enums import AttendanceMark
from ..students.model import Student
from ..subjects.model import Subject
from .model import AttendanceSession


class TallyKey(NamedTuple):
    subject_id: Optional[int]
    class_id: int
    student_id: int


@dataclass
class Tally:
    present: int = 0
    absent: int = 0


@dataclass(frozen=True)
class NameDirectory:
    """Current display names, keyed by entity id."""

    classes: Mapping[int, str] = field(default_factory=dict)
    students: Mapping[int, str] = field(default_factory=dict)
    subjects: Mapping[int, str] = field(default_factory=dict)

    @classmethod
    def from_entities(
        cls,
        *,
        classes: Iterable[SchoolClass] = (),
        students: Iterable[Student] = (),
        subjects: Iterable[Subject] = (),
    ) -> "NameDirectory":
        return cls(
            classes={c.class_id: c.name for c in classes},
            students={s.student_id: s.name for s in students},
            subjects={s.subject_id: s.name for s in subjects},
        )


def tally_marks(sessions: Iterable[AttendanceSession], *, by_subject: bool = False) -> Dict[TallyKey, Tally]:
    tallies: Dict[TallyKey, Tally] = {}
    for session in sessions:
        subject_id = session.subject_id if by_subject else None
        for entry in session.records:
            key = TallyKey(subject_id, session.class_id, entry.student_id)
            tally = tallies.get(key)
            if tally is None:
                tally = tallies[key] = Tally()
            if entry.status is AttendanceMark.PRESENT:
                tally.present += 1
            else:
                tally.absent += 1
    return tallies


def _student_row(key: TallyKey, tally: Tally, names: NameDirectory) -> dict:
    return {
        "studentId": key.student_id,
        "studentName": names.students.get(key.student_id),
        "presentCount": tally.present,
        "absentCount": tally.absent,
    }


def student_records(sessions: Iterable[AttendanceSession], names: NameDirectory) -> List[dict]:
    """Per-class student counts: ``[{classId, className, students: [...]}]``."""

    by_class: Dict[int, dict] = {}
    for key, tally in tally_marks(sessions).items():
        group = by_class.get(key.class_id)
        if group is None:
            group = by_class[key.class_id] = {
                "classId": key.class_id,
                "className": names.classes.get(key.class_id),
                "students": [],
            }
        group["students"].append(_student_row(key, tally, names))
    return list(by_class.values())


def subject_records(sessions: Iterable[AttendanceSession], names: NameDirectory) -> List[dict]:
    """Per-subject, per-class totals with the student breakdown kept."""

    by_class: Dict[tuple, dict] = {}
    for key, tally in tally_marks(sessions, by_subject=True).items():
        group = by_class.get((key.subject_id, key.class_id))
        if group is None:
            group = by_class[(key.subject_id, key.class_id)] = {
                "classId": key.class_id,
                "className": names.classes.get(key.class_id),
                "totalPresents": 0,
                "totalAbsences": 0,
                "students": [],
            }
        group["totalPresents"] += tally.present
        group["totalAbsences"] += tally.absent
        group["students"].append(_student_row(key, tally, names))

    by_subject: Dict[int, dict] = {}
    for (subject_id, _), class_summary in by_class.items():
        group = by_subject.get(subject_id)
        if group is None:
            group = by_subject[subject_id] = {
                "subjectId": subject_id,
                "subjectName": names.subjects.get(subject_id),
                "classes": [],
            }
        group["classes"].append(class_summary)
    return list(by_subject.values())


def expand_sessions(
    sessions: Iterable[AttendanceSession],
    *,
    classes: Mapping[int, SchoolClass],
    subjects: Mapping[int, Subject],
    students: Mapping[int, Student],
) -> List[dict]:
    """Session documents with class, subject and students resolved to entities."""

    out: List[dict] = []
    for session in sessions:
        doc = session.as_dict()
        school_class = classes.get(session.class_id)
        subject = subjects.get(session.subject_id)
        doc["classId"] = school_class.as_dict() if school_class else None
        doc["subjectId"] = subject.as_dict() if subject else None
        doc["records"] = [
            {
                "studentId": students[entry.student_id].as_dict() if entry.student_id in students else None,
                "status": entry.status.value,
            }
            for entry in session.records
        ]
        out.append(doc)
    return out
