from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Protocol, Sequence

from .model import Student, StudentQuery


class StudentRepository(Protocol):
    def get_by_id(self, student_id: int) -> Optional[Student]:
        raise NotImplementedError

    def list_all(self) -> Sequence[Student]:
        """All students, newest (highest id) first."""

        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError

    def search(self, query: StudentQuery) -> Sequence[Student]:
        """Students matching every filter of ``query``, highest id first."""

        raise NotImplementedError

    def create(
        self,
        *,
        first_name: str,
        last_name: str,
        date_of_birth: date,
        year_group: int,
        tutor_group: str,
        admission_date: date,
    ) -> int:
        raise NotImplementedError

    def create_many(self, rows: Sequence[Mapping[str, Any]]) -> int:
        """Insert every row (keyword arguments of ``create``) in one transaction.

        Either all rows are stored or none. Returns the number inserted.
        """

        raise NotImplementedError

    def delete_cascade(self, student_id: int) -> bool:
        """Delete the student and every attendance, behaviour and detention row it owns.

        All deletes happen in one transaction. Returns False if the student did not exist.
        """

        raise NotImplementedError
