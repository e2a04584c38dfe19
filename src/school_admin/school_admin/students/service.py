from __future__ import annotations

import logging
from datetime import date
from typing import Any, Iterable, Mapping, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_date, require_non_empty, require_positive
from ..core.exceptions import NotFoundError, ValidationError
from .model import Student, StudentQuery
from .repository import StudentRepository

logger = logging.getLogger(__name__)


class StudentService:
    """Use cases: enrolment, lookup, roster search and removal."""

    def __init__(self, students: StudentRepository):
        self._students = students

    def create_student(
        self,
        *,
        first_name: str,
        last_name: str,
        date_of_birth: date,
        year_group: int,
        tutor_group: str,
        admission_date: date,
    ) -> Student:
        first_name = require_non_empty(first_name, "First name")
        last_name = require_non_empty(last_name, "Last name")
        tutor_group = require_non_empty(tutor_group, "Tutor group")
        year_group = require_positive(year_group, "Year group")
        date_of_birth = require_date(date_of_birth, "Date of birth")
        admission_date = require_date(admission_date, "Admission date")
        if admission_date < date_of_birth:
            raise ValidationError("Admission date cannot be before date of birth")

        student_id = self._students.create(
            first_name=first_name,
            last_name=last_name,
            date_of_birth=date_of_birth,
            year_group=year_group,
            tutor_group=tutor_group,
            admission_date=admission_date,
        )
        logger.info("Enrolled student id=%s in %s", student_id, tutor_group)
        return self.require_student(student_id)

    def bulk_create_students(
        self,
        *,
        tutor_group: str,
        year_group: int,
        students: Iterable[Mapping[str, Any]],
        date_of_birth: Optional[date] = None,
        admission_date: Optional[date] = None,
    ) -> int:
        """Enrol a whole tutor group at once; returns how many students were created.

        Each entry needs ``first_name`` and ``last_name`` and may carry its own
        ``date_of_birth``, otherwise the batch ``date_of_birth`` is used.
        ``admission_date`` defaults to today. Every entry is validated before
        anything is written, and the rows are stored in one transaction.
        """
        tutor_group = require_non_empty(tutor_group, "Tutor group")
        year_group = require_positive(year_group, "Year group")
        admission_date = require_date(admission_date or now_local().date(), "Admission date")

        rows = []
        for i, entry in enumerate(students, start=1):
            dob = entry.get("date_of_birth") or date_of_birth
            if dob is None:
                raise ValidationError(f"Student {i}: date of birth is required")
            dob = require_date(dob, f"Student {i}: date of birth")
            if admission_date < dob:
                raise ValidationError(f"Student {i}: admission date cannot be before date of birth")
            rows.append(
                {
                    "first_name": require_non_empty(entry.get("first_name"), f"Student {i}: first name"),
                    "last_name": require_non_empty(entry.get("last_name"), f"Student {i}: last name"),
                    "date_of_birth": dob,
                    "year_group": year_group,
                    "tutor_group": tutor_group,
                    "admission_date": admission_date,
                }
            )

        count = self._students.create_many(rows)
        logger.info("Enrolled %d students in %s", count, tutor_group)
        return count

    def get_student(self, student_id: int) -> Optional[Student]:
        return self._students.get_by_id(int(student_id))

    def require_student(self, student_id: int) -> Student:
        student = self._students.get_by_id(int(student_id))
        if not student:
            raise NotFoundError(f"Student {student_id} not found")
        return student

    def list_students(self) -> Sequence[Student]:
        return self._students.list_all()

    def search_students(
        self,
        query: Optional[str] = None,
        year_group: Optional[int] = None,
        tutor_group: Optional[str] = None,
    ) -> Sequence[Student]:
        return self._students.search(StudentQuery.build(query, year_group, tutor_group))

    def delete_student(self, student_id: int) -> None:
        if not self._students.delete_cascade(int(student_id)):
            raise NotFoundError(f"Student {student_id} not found")
        logger.info("Removed student id=%s with attendance, behaviour and detentions", student_id)
