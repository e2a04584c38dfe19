from __future__ import annotations

from typing import Sequence

from ..common.validators import require_in_range, require_non_empty, require_positive
from ..core.exceptions import NotFoundError
from ..users.repository import UserRepository
from .model import Timetable
from .repository import TimetableRepository


class TimetableService:
    def __init__(self, timetables: TimetableRepository, users: UserRepository):
        self._timetables = timetables
        self._users = users

    def list_timetables(self) -> Sequence[Timetable]:
        return self._timetables.list_all()

    def get_timetable_by_group(self, tutor_group: str) -> Sequence[Timetable]:
        return self._timetables.list_all(tutor_group=tutor_group)

    def create_timetable(
        self,
        *,
        tutor_group: str,
        day_of_week: int,
        period: int,
        subject: str,
        room: str,
        teacher_id: int,
    ) -> Timetable:
        tutor_group = require_non_empty(tutor_group, "Tutor group")
        day_of_week = require_in_range(day_of_week, "Day of week", 0, 6)
        period = require_positive(period, "Period")
        subject = require_non_empty(subject, "Subject")
        room = require_non_empty(room, "Room")

        if not self._users.get_by_id(int(teacher_id)):
            raise NotFoundError(f"Teacher {teacher_id} not found")

        timetable_id = self._timetables.create(
            tutor_group=tutor_group,
            day_of_week=day_of_week,
            period=period,
            subject=subject,
            room=room,
            teacher_id=int(teacher_id),
        )
        return Timetable(
            timetable_id=timetable_id,
            tutor_group=tutor_group,
            day_of_week=day_of_week,
            period=period,
            subject=subject,
            room=room,
            teacher_id=int(teacher_id),
        )

    def delete_timetable(self, timetable_id: int) -> None:
        if not self._timetables.delete(int(timetable_id)):
            raise NotFoundError(f"Timetable entry {timetable_id} not found")
