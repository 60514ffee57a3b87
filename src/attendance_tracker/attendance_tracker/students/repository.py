from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Student


class StudentRepository(Protocol):
    def list_for_owner(self, owner_id: int) -> Sequence[Student]:
        raise NotImplementedError

    def list_for_class(self, owner_id: int, class_id: int) -> Sequence[Student]:
        raise NotImplementedError

    def get(self, owner_id: int, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def create(self, *, owner_id: int, class_id: int, name: str) -> int:
        raise NotImplementedError

    def delete(self, owner_id: int, student_id: int) -> bool:
        raise NotImplementedError

    def delete_for_class(self, owner_id: int, class_id: int) -> int:
        """Delete every student of a class; returns how many rows went away."""

        raise NotImplementedError
