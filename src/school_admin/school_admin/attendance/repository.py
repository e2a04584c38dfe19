from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import AttendanceSession, AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def insert_mark(
        self,
        *,
        student_id: int,
        work_date: date,
        session: AttendanceSession,
        status: AttendanceStatus,
        recorded_at: datetime,
        present_delta: int,
    ) -> Optional[AttendanceRecord]:
        """Append a mark and shift the student's present counter by ``present_delta``.

        Both writes commit together; the counter stays within
        ``[0, attendance_sessions_possible]``. Returns None when the student does
        not exist. Raises ConsistencyError if the counter could not be written.
        """

        raise NotImplementedError

    def get_latest_for_student_on(self, student_id: int, day: date) -> Optional[AttendanceRecord]:
        """Most recently recorded mark of ``student_id`` dated ``day``."""

        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def count_students_present_on(self, day: date) -> int:
        """Distinct students holding a PRESENT or LATE mark dated ``day``."""

        raise NotImplementedError
