from __future__ import annotations

from typing import FrozenSet, Mapping, Optional, Protocol, Sequence

from .model import Subject


class SubjectRepository(Protocol):
    def list_for_owner(self, owner_id: int) -> Sequence[Subject]:
        raise NotImplementedError

    def get(self, owner_id: int, subject_id: int) -> Optional[Subject]:
        raise NotImplementedError

    def create(self, *, owner_id: int, name: str) -> int:
        raise NotImplementedError

    def update_links(
        self,
        owner_id: int,
        subject_id: int,
        *,
        assigned_classes: Sequence[str],
        exclusions: Mapping[str, FrozenSet[int]],
    ) -> bool:
        """Replace the class assignments and exclusion lists of a subject."""

        raise NotImplementedError

    def delete(self, owner_id: int, subject_id: int) -> bool:
        raise NotImplementedError
