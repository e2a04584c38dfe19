from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceStatus, BehaviourType
from ..core.exceptions import ConsistencyError, RejectedError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, lock_student
from .model import BehaviourRecord
from .repository import BehaviourRepository


class MySQLBehaviourRepository(BehaviourRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

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
        with db_cursor(self._conn_factory) as (_, cur):
            if not lock_student(cur, student_id):
                return None

            if reject_if_absent_on is not None:
                cur.execute(
                    """
                    SELECT status FROM attendance
                    WHERE student_id=%s AND date=%s
                    ORDER BY recorded_at DESC, attendance_id DESC
                    LIMIT 1
                    """,
                    (int(student_id), reject_if_absent_on),
                )
                latest = fetchone(cur)
                if latest and AttendanceStatus(latest["status"]).is_absence:
                    raise RejectedError(
                        f"Student {student_id} is marked {latest['status']} on {reject_if_absent_on.isoformat()}"
                    )

            cur.execute(
                """
                INSERT INTO behaviour(student_id, type, category, points, notes, date)
                VALUES(%s,%s,%s,%s,%s,%s)
                """,
                (int(student_id), type.value, category, int(points), notes, recorded_at),
            )
            behaviour_id = int(cur.lastrowid)

            try:
                cur.execute(
                    "UPDATE students SET behaviour_points = behaviour_points + %s WHERE student_id=%s",
                    (int(points), int(student_id)),
                )
                cur.execute("SELECT behaviour_points FROM students WHERE student_id=%s", (int(student_id),))
                r = fetchone(cur)
            except mysql.connector.Error as e:
                raise ConsistencyError(f"Could not update behaviour points for student {student_id}") from e
            if not r:
                raise ConsistencyError(f"Student {student_id} disappeared during behaviour update")

            record = BehaviourRecord(
                behaviour_id=behaviour_id,
                student_id=int(student_id),
                type=type,
                category=category,
                points=int(points),
                date=recorded_at,
                notes=notes,
            )
            return record, int(r["behaviour_points"])

    def list_for_student(self, student_id: int) -> Sequence[BehaviourRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT behaviour_id, student_id, type, category, points, notes, date
                FROM behaviour
                WHERE student_id=%s
                ORDER BY date DESC, behaviour_id DESC
                """,
                (int(student_id),),
            )
            return [
                BehaviourRecord(
                    behaviour_id=int(r["behaviour_id"]),
                    student_id=int(r["student_id"]),
                    type=BehaviourType(r["type"]),
                    category=r["category"],
                    points=int(r["points"]),
                    date=r["date"],
                    notes=r.get("notes"),
                )
                for r in fetchall(cur)
            ]

    def sum_points_since(self, since: datetime) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COALESCE(SUM(points), 0) AS total FROM behaviour WHERE date >= %s", (since,))
            r = fetchone(cur)
            return int(r["total"] or 0) if r else 0
