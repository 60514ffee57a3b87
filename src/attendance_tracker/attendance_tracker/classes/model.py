from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class SchoolClass:
    """Domain entity: a named grouping of students."""

    class_id: int
    owner_id: int
    name: str
    created_at: Optional[datetime] = None

    def as_dict(self) -> dict:
        return {
            "id": self.class_id,
            "name": self.name,
            "createdAt": self.created_at.isoformat() if self.created_at else None,
        }
