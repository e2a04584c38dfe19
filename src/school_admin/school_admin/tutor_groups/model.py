from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class TutorGroup:
    tutor_group_id: int
    name: str
    year_group: int

    def to_dict(self) -> dict:
        return {"id": self.tutor_group_id, "name": self.name, "yearGroup": self.year_group}
