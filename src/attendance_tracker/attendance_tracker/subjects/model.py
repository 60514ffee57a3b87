from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from typing import FrozenSet, Mapping, Optional, Tuple


@dataclass(frozen=True)
class Subject:
    """Domain entity: a subject taught across one or more classes.

    Assignments and exclusions are keyed by class *name*, not class id.
    ``exclusions`` maps a class name to the ids of students of that class who
    are not expected to attend this subject.
    """

    subject_id: int
    owner_id: int
    name: str
    assigned_classes: Tuple[str, ...] = ()
    exclusions: Mapping[str, FrozenSet[int]] = field(default_factory=dict)
    created_at: Optional[datetime] = None

    def excluded_for(self, class_name: str) -> FrozenSet[int]:
        return self.exclusions.get(class_name, frozenset())

    def as_dict(self) -> dict:
        return {
            "id": self.subject_id,
            "name": self.name,
            "assignedClasses": list(self.assigned_classes),
            "excludedStudents": [
                {"className": class_name, "studentIds": sorted(student_ids)}
                for class_name, student_ids in self.exclusions.items()
            ],
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
