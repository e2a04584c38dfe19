from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.enums import DetentionStatus, DetentionType


@dataclass(frozen=True)
class Detention:
    detention_id: int
    student_id: int
    type: DetentionType
    date: date
    time: str
    location: str
    status: DetentionStatus = DetentionStatus.SCHEDULED
    reason: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "id": self.detention_id,
            "studentId": self.student_id,
            "type": self.type.value,
            "date": self.date.isoformat(),
            "time": self.time,
            "location": self.location,
            "status": self.status.value,
            "reason": self.reason,
        }
