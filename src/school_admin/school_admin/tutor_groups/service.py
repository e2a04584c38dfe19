from __future__ import annotations

from typing import Sequence

from ..common.validators import require_non_empty, require_positive
from ..core.exceptions import ValidationError
from .model import TutorGroup
from .repository import TutorGroupRepository


class TutorGroupService:
    def __init__(self, tutor_groups: TutorGroupRepository):
        self._tutor_groups = tutor_groups

    def list_tutor_groups(self) -> Sequence[TutorGroup]:
        return self._tutor_groups.list_all()

    def create_tutor_group(self, *, name: str, year_group: int) -> TutorGroup:
        name = require_non_empty(name, "Tutor group name")
        year_group = require_positive(year_group, "Year group")

        if self._tutor_groups.get_by_name(name):
            raise ValidationError(f"Tutor group {name} already exists")

        tutor_group_id = self._tutor_groups.create(name=name, year_group=year_group)
        return TutorGroup(tutor_group_id=tutor_group_id, name=name, year_group=year_group)
