from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import TutorGroup


class TutorGroupRepository(Protocol):
    def get_by_name(self, name: str) -> Optional[TutorGroup]:
        raise NotImplementedError

    def list_all(self) -> Sequence[TutorGroup]:
        raise NotImplementedError

    def create(self, *, name: str, year_group: int) -> int:
        raise NotImplementedError
