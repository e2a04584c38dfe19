from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from ..core.enums import DetentionStatus, DetentionType
from .model import Detention


class DetentionRepository(Protocol):
    def get_by_id(self, detention_id: int) -> Optional[Detention]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Detention]:
        """All detentions, latest date first."""

        raise NotImplementedError

    def list_for_student(self, student_id: int) -> Sequence[Detention]:
        raise NotImplementedError

    def create(
        self,
        *,
        student_id: int,
        type: DetentionType,
        date: date,
        time: str,
        location: str,
        status: DetentionStatus,
        reason: Optional[str] = None,
    ) -> int:
        raise NotImplementedError

    def update(self, detention_id: int, changes: Mapping[str, Any]) -> bool:
        """Patch the given columns. Enum values arrive already parsed.

        Returns False when the detention does not exist.
        """

        raise NotImplementedError

    def count_between(self, start: date, end: date) -> int:
        """Detentions dated within ``[start, end]``."""

        raise NotImplementedError
