from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import BehaviourType
from .model import BehaviourRecord


class BehaviourRepository(Protocol):
    def insert_and_add_points(
        self,
        *,
        student_id: int,
        type: BehaviourType,
        category: str,
        points: int,
        notes: Optional[str],
        recorded_at: datetime,
        reject_if_absent_on: Optional[date] = None,
    ) -> Optional[tuple[BehaviourRecord, int]]:
        """Append a behaviour row and add ``points`` to the student's total in one transaction.

        With ``reject_if_absent_on`` set, the student's latest mark on that day is
        read under the student row lock and RejectedError is raised, writing
        nothing, when it is an absence.

        Returns the record with the new total, or None when the student does not
        exist. Raises ConsistencyError if the total could not be written.
        """

        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[BehaviourRecord]:
        raise NotImplementedError

    def sum_points_since(self, since: datetime) -> int:
        raise NotImplementedError
