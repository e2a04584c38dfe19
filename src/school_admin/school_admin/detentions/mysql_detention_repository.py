from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Any, Mapping, Optional, Sequence

from ..core.enums import DetentionStatus, DetentionType
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Detention
from .repository import DetentionRepository

_COLUMNS = "detention_id, student_id, type, date, time, location, status, reason"
_UPDATABLE = ("type", "date", "time", "location", "status", "reason")


def _to_detention(r: dict) -> Detention:
    return Detention(
        detention_id=int(r["detention_id"]),
        student_id=int(r["student_id"]),
        type=DetentionType(r["type"]),
        date=r["date"],
        time=str(r["time"]),
        location=r["location"],
        status=DetentionStatus(r["status"]),
        reason=r.get("reason"),
    )


class MySQLDetentionRepository(DetentionRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_id(self, detention_id: int) -> Optional[Detention]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM detentions WHERE detention_id=%s", (int(detention_id),))
            r = fetchone(cur)
            return _to_detention(r) if r else None

    def list_all(self) -> Sequence[Detention]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM detentions ORDER BY date DESC, detention_id DESC")
            return [_to_detention(r) for r in fetchall(cur)]

    def list_for_student(self, student_id: int) -> Sequence[Detention]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM detentions WHERE student_id=%s ORDER BY date DESC, detention_id DESC",
                (int(student_id),),
            )
            return [_to_detention(r) for r in fetchall(cur)]

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
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO detentions(student_id, type, date, time, location, status, reason)
                VALUES(%s,%s,%s,%s,%s,%s,%s)
                """,
                (int(student_id), type.value, date, time, location, status.value, reason),
            )
            return int(cur.lastrowid)

    def update(self, detention_id: int, changes: Mapping[str, Any]) -> bool:
        fields = [f for f in _UPDATABLE if f in changes]

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT detention_id FROM detentions WHERE detention_id=%s FOR UPDATE", (int(detention_id),))
            if not fetchone(cur):
                return False
            if not fields:
                return True

            assignments = ", ".join(f"{f}=%s" for f in fields)
            params = [changes[f].value if isinstance(changes[f], Enum) else changes[f] for f in fields]
            cur.execute(
                f"UPDATE detentions SET {assignments} WHERE detention_id=%s",
                (*params, int(detention_id)),
            )
            return True

    def count_between(self, start: date, end: date) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM detentions WHERE date BETWEEN %s AND %s", (start, end))
            r = fetchone(cur)
            return int(r["total"]) if r else 0
