from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class Student:
    """Domain entity: a student belongs to exactly one class."""

    student_id: int
    owner_id: int
    class_id: int
    name: str
    created_at: Optional[datetime] = None

    def as_dict(self) -> dict:
        return {
            "id": self.student_id,
            "name": self.name,
            "classId": self.class_id,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
