from __future__ import annotations

from datetime import datetime
from decimal import ROUND_HALF_UP, Decimal

from ..attendance.repository import AttendanceRepository
from ..behaviour.repository import BehaviourRepository
from ..common.datetime_utils import iso_week_bounds, now_local, start_of_day
from ..core.constants import SESSIONS_PER_YEAR
from ..detentions.repository import DetentionRepository
from ..students.repository import StudentRepository
from .model import DashboardStats, TutorGroupAttendance


def percent(part: int, whole: int) -> int:
    """``part / whole`` as a whole percentage, halves rounded up; 0 when ``whole`` is 0."""
    if not whole:
        return 0
    value = Decimal(100) * Decimal(part) / Decimal(whole)
    return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))


class DashboardService:
    """Point-in-time aggregates, always recomputed from the stored records."""

    def __init__(
        self,
        students: StudentRepository,
        attendance: AttendanceRepository,
        behaviour: BehaviourRepository,
        detentions: DetentionRepository,
        *,
        sessions_per_year: int = SESSIONS_PER_YEAR,
    ):
        self._students = students
        self._attendance = attendance
        self._behaviour = behaviour
        self._detentions = detentions
        self._sessions_per_year = int(sessions_per_year)

    def get_attendance_percentage_today(self, *, now: datetime | None = None) -> int:
        now = now or now_local()
        total = self._students.count()
        if total == 0:
            return 0
        present = self._attendance.count_students_present_on(now.date())
        return percent(min(present, total), total)

    def get_behaviour_points_today(self, *, now: datetime | None = None) -> int:
        now = now or now_local()
        return int(self._behaviour.sum_points_since(start_of_day(now)) or 0)

    def get_detentions_this_week(self, *, now: datetime | None = None) -> int:
        now = now or now_local()
        monday, sunday = iso_week_bounds(now.date())
        return int(self._detentions.count_between(monday, sunday) or 0)

    def get_dashboard_stats(self, *, now: datetime | None = None) -> DashboardStats:
        now = now or now_local()
        return DashboardStats(
            total_students=self._students.count(),
            attendance_today=self.get_attendance_percentage_today(now=now),
            behaviour_points_today=self.get_behaviour_points_today(now=now),
            detentions_this_week=self.get_detentions_this_week(now=now),
        )

    def get_tutor_group_attendance(self) -> list[TutorGroupAttendance]:
        """Year-to-date attendance per tutor group, groups in roster order."""
        groups: dict[str, list[int]] = {}
        for s in self._students.list_all():
            groups.setdefault(s.tutor_group, []).append(s.attendance_sessions_present)

        return [
            TutorGroupAttendance(name=name, present=percent(sum(present), self._sessions_per_year * len(present)))
            for name, present in groups.items()
        ]
