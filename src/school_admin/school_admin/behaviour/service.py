from __future__ import annotations

import logging
from datetime import datetime
from typing import Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import parse_enum, require_non_empty
from ..core.constants import DETENTION_POINTS_THRESHOLD
from ..core.enums import BehaviourType
from ..core.exceptions import ConsistencyError, NotFoundError, RejectedError
from ..core.signals import detention_threshold_reached
from ..students.counters import reaches_detention_threshold
from ..students.model import StudentQuery
from ..students.repository import StudentRepository
from .model import BehaviourOutcome, BehaviourRecord
from .repository import BehaviourRepository

logger = logging.getLogger(__name__)


class BehaviourService:
    """Records behaviour points and keeps each student's running total.

    A student whose latest mark today is an absence cannot receive a positive
    award that day. When a total falls to the detention threshold the
    ``detention_threshold_reached`` signal is sent; scheduling the detention is
    left to whoever listens.
    """

    def __init__(
        self,
        behaviour: BehaviourRepository,
        students: StudentRepository,
        *,
        detention_threshold: int = DETENTION_POINTS_THRESHOLD,
    ):
        self._behaviour = behaviour
        self._students = students
        self._threshold = int(detention_threshold)

    def create_behaviour(
        self,
        student_id: int,
        type: BehaviourType | str,
        category: str,
        points: int,
        notes: Optional[str] = None,
        *,
        now: datetime | None = None,
    ) -> BehaviourOutcome:
        type = parse_enum(BehaviourType, type, "Behaviour type")
        category = require_non_empty(category, "Category")
        points = int(points)
        notes = notes.strip() if notes and notes.strip() else None
        now = now or now_local()

        try:
            result = self._behaviour.insert_and_add_points(
                student_id=int(student_id),
                type=type,
                category=category,
                points=points,
                notes=notes,
                recorded_at=now,
                reject_if_absent_on=now.date() if points > 0 else None,
            )
        except RejectedError:
            logger.warning("Refused positive award for student %s, marked absent today", student_id)
            raise
        except ConsistencyError:
            logger.error("Behaviour entry for student %s rolled back", student_id, exc_info=True)
            raise

        if result is None:
            raise NotFoundError(f"Student {student_id} not found")

        record, total = result
        logger.info("Recorded %+d %s points for student %s (total %d)", points, category, student_id, total)

        reached = reaches_detention_threshold(total, self._threshold)
        if reached:
            logger.warning("Student %s reached %d behaviour points, detention threshold is %d", student_id, total, self._threshold)
            detention_threshold_reached.send(
                self,
                student_id=record.student_id,
                behaviour_points=total,
                behaviour_id=record.behaviour_id,
            )

        return BehaviourOutcome(record=record, behaviour_points=total, detention_threshold_reached=reached)

    def award_tutor_group(
        self,
        tutor_group: str,
        type: BehaviourType | str,
        category: str,
        points: int,
        notes: Optional[str] = None,
        *,
        now: datetime | None = None,
    ) -> int:
        """Record the same entry for every student in ``tutor_group``.

        Students refused by the absence guard are skipped. Returns how many
        records were created.
        """
        tutor_group = require_non_empty(tutor_group, "Tutor group")
        now = now or now_local()

        created = 0
        for student in self._students.search(StudentQuery(tutor_group=tutor_group)):
            try:
                self.create_behaviour(student.student_id, type, category, points, notes, now=now)
            except RejectedError:
                logger.info("Skipped absent student %s in group award for %s", student.student_id, tutor_group)
                continue
            created += 1
        return created

    def get_student_behaviour(self, student_id: int) -> Sequence[BehaviourRecord]:
        return self._behaviour.list_for_student(int(student_id))
