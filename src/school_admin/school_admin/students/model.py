from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import SESSIONS_PER_YEAR


@dataclass(frozen=True)
class Student:
    """A pupil on roll, with the running counters kept in sync by the services."""

    student_id: int
    first_name: str
    last_name: str
    date_of_birth: date
    year_group: int
    tutor_group: str
    admission_date: date
    attendance_sessions_possible: int = SESSIONS_PER_YEAR
    attendance_sessions_present: int = SESSIONS_PER_YEAR
    behaviour_points: int = 0

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    def to_dict(self) -> dict:
        return {
            "id": self.student_id,
            "firstName": self.first_name,
            "lastName": self.last_name,
            "dateOfBirth": self.date_of_birth.isoformat(),
            "yearGroup": self.year_group,
            "tutorGroup": self.tutor_group,
            "admissionDate": self.admission_date.isoformat(),
            "attendanceSessionsPossible": self.attendance_sessions_possible,
            "attendanceSessionsPresent": self.attendance_sessions_present,
            "behaviourPoints": self.behaviour_points,
        }


@dataclass(frozen=True)
class StudentQuery:
    """Optional roster filters, combined with AND.

    ``text`` is a case-insensitive substring of "first last"; ``year_group`` and
    ``tutor_group`` are exact matches. A filter left as None is not applied.
    """

    text: Optional[str] = None
    year_group: Optional[int] = None
    tutor_group: Optional[str] = None

    @classmethod
    def build(cls, query: Optional[str] = None, year_group: Optional[int] = None, tutor_group: Optional[str] = None) -> "StudentQuery":
        text = query.strip() if query and query.strip() else None
        tutor_group = tutor_group.strip() if tutor_group and tutor_group.strip() else None
        return cls(text=text, year_group=int(year_group) if year_group is not None else None, tutor_group=tutor_group)

    @property
    def is_empty(self) -> bool:
        return self.text is None and self.year_group is None and self.tutor_group is None

    def matches(self, student: Student) -> bool:
        if self.text is not None and self.text.lower() not in student.full_name.lower():
            return False
        if self.year_group is not None and student.year_group != self.year_group:
            return False
        if self.tutor_group is not None and student.tutor_group != self.tutor_group:
            return False
        return True

    def to_sql(self) -> tuple[list[str], list[object]]:
        """Render WHERE clauses and their parameters for the students table."""
        clauses: list[str] = []
        params: list[object] = []

        if self.text is not None:
            clauses.append("LOWER(CONCAT(first_name, ' ', last_name)) LIKE %s")
            params.append(f"%{_escape_like(self.text.lower())}%")
        if self.year_group is not None:
            clauses.append("year_group=%s")
            params.append(self.year_group)
        if self.tutor_group is not None:
            clauses.append("tutor_group=%s")
            params.append(self.tutor_group)

        return clauses, params


def _escape_like(value: str) -> str:
    return value.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
