from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import SchoolClass


class ClassRepository(Protocol):
    def list_for_owner(self, owner_id: int) -> Sequence[SchoolClass]:
        raise NotImplementedError

    def get(self, owner_id: int, class_id: int) -> Optional[SchoolClass]:
        raise NotImplementedError

    def create(self, *, owner_id: int, name: str) -> int:
        raise NotImplementedError

    def delete(self, owner_id: int, class_id: int) -> bool:
        raise NotImplementedError
