from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class DashboardStats:
    total_students: int = 0
    attendance_today: int = 0
    behaviour_points_today: int = 0
    detentions_this_week: int = 0

    def to_dict(self) -> dict:
        return {
            "totalStudents": self.total_students,
            "attendanceToday": self.attendance_today,
            "behaviourPointsToday": self.behaviour_points_today,
            "detentionsThisWeek": self.detentions_this_week,
        }


@dataclass(frozen=True)
class TutorGroupAttendance:
    name: str
    present: int

    def to_dict(self) -> dict:
        return {"name": self.name, "present": self.present}
