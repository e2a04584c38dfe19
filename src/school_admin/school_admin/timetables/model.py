from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Timetable:
    """One lesson slot for a tutor group. ``day_of_week`` runs 0 (Sunday) to 6."""

    timetable_id: int
    tutor_group: str
    day_of_week: int
    period: int
    subject: str
    room: str
    teacher_id: int

    def to_dict(self) -> dict:
        return {
            "id": self.timetable_id,
            "tutorGroup": self.tutor_group,
            "dayOfWeek": self.day_of_week,
            "period": self.period,
            "subject": self.subject,
            "room": self.room,
            "teacherId": self.teacher_id,
        }
