from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..core.enums import AttendanceSession, AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """One register mark for one student in one session. Never updated."""

    attendance_id: int
    student_id: int
    date: date
    session: AttendanceSession
    status: AttendanceStatus
    recorded_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.attendance_id,
            "studentId": self.student_id,
            "date": self.date.isoformat(),
            "session": self.session.value,
            "status": self.status.value,
            "recordedAt": self.recorded_at.isoformat(),
        }
