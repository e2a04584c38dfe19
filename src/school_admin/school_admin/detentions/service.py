from __future__ import annotations

import logging
from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..common.validators import parse_enum, require_date, require_non_empty
from ..core.enums import DetentionStatus, DetentionType
from ..core.exceptions import NotFoundError, ValidationError
from ..students.repository import StudentRepository
from .model import Detention
from .repository import DetentionRepository

logger = logging.getLogger(__name__)

UPDATABLE_FIELDS = frozenset({"type", "date", "time", "location", "status", "reason"})


class DetentionService:
    def __init__(self, detentions: DetentionRepository, students: StudentRepository):
        self._detentions = detentions
        self._students = students

    def create_detention(
        self,
        *,
        student_id: int,
        type: DetentionType | str,
        date: date,
        time: str,
        location: str,
        status: DetentionStatus | str = DetentionStatus.SCHEDULED,
        reason: Optional[str] = None,
    ) -> Detention:
        type = parse_enum(DetentionType, type, "Detention type")
        status = parse_enum(DetentionStatus, status, "Detention status")
        date = require_date(date, "Date")
        time = require_non_empty(time, "Time")
        location = require_non_empty(location, "Location")
        reason = reason.strip() if reason and reason.strip() else None

        if not self._students.get_by_id(int(student_id)):
            raise NotFoundError(f"Student {student_id} not found")

        detention_id = self._detentions.create(
            student_id=int(student_id),
            type=type,
            date=date,
            time=time,
            location=location,
            status=status,
            reason=reason,
        )
        logger.info("Scheduled %s detention id=%s for student %s on %s", type.value, detention_id, student_id, date)
        return self.require_detention(detention_id)

    def update_detention(self, detention_id: int, changes: Mapping[str, Any]) -> Detention:
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValidationError(f"Cannot update detention field(s): {', '.join(sorted(unknown))}")

        clean: dict[str, Any] = {}
        for field, value in changes.items():
            if field == "type":
                clean[field] = parse_enum(DetentionType, value, "Detention type")
            elif field == "status":
                clean[field] = parse_enum(DetentionStatus, value, "Detention status")
            elif field in ("time", "location"):
                clean[field] = require_non_empty(value, field.capitalize())
            elif field == "date":
                clean[field] = require_date(value, "Date")
            else:
                clean[field] = value.strip() if isinstance(value, str) and value.strip() else None

        if not self._detentions.update(int(detention_id), clean):
            raise NotFoundError(f"Detention {detention_id} not found")

        logger.info("Updated detention id=%s: %s", detention_id, ", ".join(sorted(clean)) or "no changes")
        return self.require_detention(detention_id)

    def get_detention(self, detention_id: int) -> Optional[Detention]:
        return self._detentions.get_by_id(int(detention_id))

    def require_detention(self, detention_id: int) -> Detention:
        detention = self._detentions.get_by_id(int(detention_id))
        if not detention:
            raise NotFoundError(f"Detention {detention_id} not found")
        return detention

    def list_detentions(self) -> Sequence[Detention]:
        return self._detentions.list_all()

    def list_student_detentions(self, student_id: int) -> Sequence[Detention]:
        return self._detentions.list_for_student(int(student_id))
