from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Timetable


class TimetableRepository(Protocol):
    def list_all(self, *, tutor_group: Optional[str] = None) -> Sequence[Timetable]:
        raise NotImplementedError

    def create(self, *, tutor_group: str, day_of_week: int, period: int, subject: str, room: str, teacher_id: int) -> int:
        raise NotImplementedError

    def delete(self, timetable_id: int) -> bool:
        raise NotImplementedError
