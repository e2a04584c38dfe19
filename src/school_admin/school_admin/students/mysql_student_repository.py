from __future__ import annotations

from datetime import date
from typing import Any, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, lock_student
from .model import Student, StudentQuery
from .repository import StudentRepository

_COLUMNS = """
    student_id, first_name, last_name, date_of_birth, year_group, tutor_group, admission_date,
    attendance_sessions_possible, attendance_sessions_present, behaviour_points
"""

# Owned tables, deleted before the student row itself.
_OWNED_TABLES = ("attendance", "behaviour", "detentions")


def _to_student(r: dict) -> Student:
    return Student(
        student_id=int(r["student_id"]),
        first_name=r["first_name"],
        last_name=r["last_name"],
        date_of_birth=r["date_of_birth"],
        year_group=int(r["year_group"]),
        tutor_group=r["tutor_group"],
        admission_date=r["admission_date"],
        attendance_sessions_possible=int(r["attendance_sessions_possible"]),
        attendance_sessions_present=int(r["attendance_sessions_present"]),
        behaviour_points=int(r["behaviour_points"]),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students WHERE student_id=%s", (int(student_id),))
            r = fetchone(cur)
            return _to_student(r) if r else None

    def list_all(self) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM students ORDER BY student_id DESC")
            return [_to_student(r) for r in fetchall(cur)]

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM students")
            r = fetchone(cur)
            return int(r["total"]) if r else 0

    def search(self, query: StudentQuery) -> Sequence[Student]:
        if query.is_empty:
            return self.list_all()

        clauses, params = query.to_sql()
        where = " AND ".join(clauses)

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_COLUMNS}
                FROM students
                WHERE {where}
                ORDER BY student_id DESC
                """,
                tuple(params),
            )
            return [_to_student(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO students(first_name, last_name, date_of_birth, year_group, tutor_group, admission_date)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (first_name, last_name, date_of_birth, int(year_group), tutor_group, admission_date),
            )
            return int(cur.lastrowid)

    def create_many(self, rows: Sequence[Mapping[str, Any]]) -> int:
        if not rows:
            return 0

        with db_cursor(self._conn_factory) as (_, cur):
            for row in rows:
                cur.execute(
                    """
                    INSERT INTO students(first_name, last_name, date_of_birth, year_group, tutor_group, admission_date)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        row["first_name"],
                        row["last_name"],
                        row["date_of_birth"],
                        int(row["year_group"]),
                        row["tutor_group"],
                        row["admission_date"],
                    ),
                )
            return len(rows)

    def delete_cascade(self, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            if not lock_student(cur, student_id):
                return False
            for table in _OWNED_TABLES:
                cur.execute(f"DELETE FROM {table} WHERE student_id=%s", (int(student_id),))
            cur.execute("DELETE FROM students WHERE student_id=%s", (int(student_id),))
            return True
