from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import TutorGroup
from .repository import TutorGroupRepository


class MySQLTutorGroupRepository(TutorGroupRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_name(self, name: str) -> Optional[TutorGroup]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT tutor_group_id, name, year_group FROM tutor_groups WHERE name=%s", (name,))
            r = fetchone(cur)
            if not r:
                return None
            return TutorGroup(tutor_group_id=int(r["tutor_group_id"]), name=r["name"], year_group=int(r["year_group"]))

    def list_all(self) -> Sequence[TutorGroup]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT tutor_group_id, name, year_group FROM tutor_groups ORDER BY year_group, name")
            return [
                TutorGroup(tutor_group_id=int(r["tutor_group_id"]), name=r["name"], year_group=int(r["year_group"]))
                for r in fetchall(cur)
            ]

    def create(self, *, name: str, year_group: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO tutor_groups(name, year_group) VALUES(%s,%s)", (name, int(year_group)))
            return int(cur.lastrowid)
