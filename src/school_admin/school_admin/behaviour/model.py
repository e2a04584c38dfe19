from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import BehaviourType


@dataclass(frozen=True)
class BehaviourRecord:
    """A logged behaviour incident or award. Never updated."""

    behaviour_id: int
    student_id: int
    type: BehaviourType
    category: str
    points: int
    date: datetime
    notes: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.behaviour_id,
            "studentId": self.student_id,
            "type": self.type.value,
            "category": self.category,
            "points": self.points,
            "notes": self.notes,
            "date": self.date.isoformat(),
        }


@dataclass(frozen=True)
class BehaviourOutcome:
    """Result of recording behaviour: the new row and the student's updated total."""

    record: BehaviourRecord
    behaviour_points: int
    detention_threshold_reached: bool = False
