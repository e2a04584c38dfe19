from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall
from .model import Timetable
from .repository import TimetableRepository


class MySQLTimetableRepository(TimetableRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self, *, tutor_group: Optional[str] = None) -> Sequence[Timetable]:
        clauses = []
        params: list[object] = []
        if tutor_group is not None:
            clauses.append("tutor_group=%s")
            params.append(tutor_group)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT timetable_id, tutor_group, day_of_week, period, subject, room, teacher_id
                FROM timetables
                {where}
                ORDER BY tutor_group ASC, day_of_week ASC, period ASC
                """,
                tuple(params),
            )
            return [
                Timetable(
                    timetable_id=int(r["timetable_id"]),
                    tutor_group=r["tutor_group"],
                    day_of_week=int(r["day_of_week"]),
                    period=int(r["period"]),
                    subject=r["subject"],
                    room=r["room"],
                    teacher_id=int(r["teacher_id"]),
                )
                for r in fetchall(cur)
            ]

    def create(self, *, tutor_group: str, day_of_week: int, period: int, subject: str, room: str, teacher_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO timetables(tutor_group, day_of_week, period, subject, room, teacher_id)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (tutor_group, int(day_of_week), int(period), subject, room, int(teacher_id)),
            )
            return int(cur.lastrowid)

    def delete(self, timetable_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM timetables WHERE timetable_id=%s", (int(timetable_id),))
            return cur.rowcount > 0
