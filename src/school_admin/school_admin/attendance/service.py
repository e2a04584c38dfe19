from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Sequence

from ..common.datetime_utils import now_local
from ..common.validators import parse_enum
from ..core.enums import AttendanceSession, AttendanceStatus
from ..core.exceptions import ConsistencyError, NotFoundError
from ..students.counters import present_delta
from .model import AttendanceRecord
from .repository import AttendanceRepository

logger = logging.getLogger(__name__)


class AttendanceService:
    """Records register marks and keeps each student's present counter in step.

    Marks are not deduplicated: recording the same (student, date, session)
    twice counts twice, so callers submit each mark once.
    """

    def __init__(self, attendance: AttendanceRepository):
        self._attendance = attendance

    def record_attendance(
        self,
        student_id: int,
        work_date: date,
        session: AttendanceSession | str,
        status: AttendanceStatus | str,
        *,
        now: datetime | None = None,
    ) -> AttendanceRecord:
        session = parse_enum(AttendanceSession, session, "Session")
        status = parse_enum(AttendanceStatus, status, "Attendance status")
        now = now or now_local()

        try:
            record = self._attendance.insert_mark(
                student_id=int(student_id),
                work_date=work_date,
                session=session,
                status=status,
                recorded_at=now,
                present_delta=present_delta(status),
            )
        except ConsistencyError:
            logger.error("Attendance mark for student %s rolled back", student_id, exc_info=True)
            raise

        if record is None:
            raise NotFoundError(f"Student {student_id} not found")

        logger.info(
            "Recorded %s for student %s on %s %s", status.value, student_id, work_date.isoformat(), session.value
        )
        return record

    def get_student_attendance(self, student_id: int) -> Sequence[AttendanceRecord]:
        return self._attendance.list_for_student(int(student_id))

    def get_latest_mark(self, student_id: int, day: date) -> AttendanceRecord | None:
        return self._attendance.get_latest_for_student_on(int(student_id), day)
