from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Sequence

import mysql.connector

from ..core.enums import AttendanceSession, AttendanceStatus
from ..core.exceptions import ConsistencyError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, lock_student
from .model import AttendanceRecord
from .repository import AttendanceRepository

_PRESENT_STATUSES = tuple(s.value for s in AttendanceStatus if s.counts_as_present)


def _to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        attendance_id=int(r["attendance_id"]),
        student_id=int(r["student_id"]),
        date=r["date"],
        session=AttendanceSession(r["session"]),
        status=AttendanceStatus(r["status"]),
        recorded_at=r["recorded_at"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def insert_mark(
        self,
        *,
        student_id: int,
        work_date: date,
        session: AttendanceSession,
        status: AttendanceStatus,
        recorded_at: datetime,
        present_delta: int,
    ) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            if not lock_student(cur, student_id):
                return None

            cur.execute(
                """
                INSERT INTO attendance(student_id, date, session, status, recorded_at)
                VALUES(%s,%s,%s,%s,%s)
                """,
                (int(student_id), work_date, session.value, status.value, recorded_at),
            )
            attendance_id = int(cur.lastrowid)

            if present_delta:
                try:
                    cur.execute(
                        """
                        UPDATE students
                        SET attendance_sessions_present = GREATEST(
                            0, LEAST(attendance_sessions_possible, attendance_sessions_present + %s)
                        )
                        WHERE student_id=%s
                        """,
                        (int(present_delta), int(student_id)),
                    )
                except mysql.connector.Error as e:
                    raise ConsistencyError(f"Could not update attendance counter for student {student_id}") from e

            return AttendanceRecord(
                attendance_id=attendance_id,
                student_id=int(student_id),
                date=work_date,
                session=session,
                status=status,
                recorded_at=recorded_at,
            )

    def get_latest_for_student_on(self, student_id: int, day: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, student_id, date, session, status, recorded_at
                FROM attendance
                WHERE student_id=%s AND date=%s
                ORDER BY recorded_at DESC, attendance_id DESC
                LIMIT 1
                """,
                (int(student_id), day),
            )
            r = fetchone(cur)
            return _to_record(r) if r else None

    def list_for_student(self, student_id: int) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT attendance_id, student_id, date, session, status, recorded_at
                FROM attendance
                WHERE student_id=%s
                ORDER BY date DESC, attendance_id DESC
                """,
                (int(student_id),),
            )
            return [_to_record(r) for r in fetchall(cur)]

    def count_students_present_on(self, day: date) -> int:
        placeholders = ",".join(["%s"] * len(_PRESENT_STATUSES))
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT COUNT(DISTINCT a.student_id) AS present
                FROM attendance a
                JOIN students s ON s.student_id = a.student_id
                WHERE a.date=%s AND a.status IN ({placeholders})
                """,
                (day, *_PRESENT_STATUSES),
            )
            r = fetchone(cur)
            return int(r["present"] or 0) if r else 0
