from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import SchoolClass
from .repository import ClassRepository


def _to_class(row: dict) -> SchoolClass:
    return SchoolClass(
        class_id=int(row["class_id"]),
        owner_id=int(row["owner_id"]),
        name=row["name"],
        created_at=row.get("created_at"),
    )


class MySQLClassRepository(ClassRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_owner(self, owner_id: int) -> Sequence[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT class_id, owner_id, name, created_at
                FROM classes
                WHERE owner_id=%s
                ORDER BY class_id
                """,
                (owner_id,),
            )
            return [_to_class(r) for r in fetchall(cur)]

    def get(self, owner_id: int, class_id: int) -> Optional[SchoolClass]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT class_id, owner_id, name, created_at FROM classes WHERE owner_id=%s AND class_id=%s",
                (owner_id, class_id),
            )
            row = fetchone(cur)
            return _to_class(row) if row else None

    def create(self, *, owner_id: int, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO classes(owner_id, name) VALUES(%s,%s)", (owner_id, name))
            return int(cur.lastrowid)

    def delete(self, owner_id: int, class_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM classes WHERE owner_id=%s AND class_id=%s", (owner_id, class_id))
            return cur.rowcount > 0
