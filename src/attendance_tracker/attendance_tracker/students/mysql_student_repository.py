from __future__ import annotations

from typing import Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from .model import Student
from .repository import StudentRepository

_COLUMNS = "student_id, owner_id, class_id, name, created_at"


def _to_student(row: dict) -> Student:
    return Student(
        student_id=int(row["student_id"]),
        owner_id=int(row["owner_id"]),
        class_id=int(row["class_id"]),
        name=row["name"],
        created_at=row.get("created_at"),
    )


class MySQLStudentRepository(StudentRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_for_owner(self, owner_id: int) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM students WHERE owner_id=%s ORDER BY student_id",
                (owner_id,),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def list_for_class(self, owner_id: int, class_id: int) -> Sequence[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM students WHERE owner_id=%s AND class_id=%s ORDER BY student_id",
                (owner_id, class_id),
            )
            return [_to_student(r) for r in fetchall(cur)]

    def get(self, owner_id: int, student_id: int) -> Optional[Student]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_COLUMNS} FROM students WHERE owner_id=%s AND student_id=%s",
                (owner_id, student_id),
            )
            row = fetchone(cur)
            return _to_student(row) if row else None

    def create(self, *, owner_id: int, class_id: int, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO students(owner_id, class_id, name) VALUES(%s,%s,%s)",
                (owner_id, class_id, name),
            )
            return int(cur.lastrowid)

    def delete(self, owner_id: int, student_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE owner_id=%s AND student_id=%s", (owner_id, student_id))
            return cur.rowcount > 0

    def delete_for_class(self, owner_id: int, class_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM students WHERE owner_id=%s AND class_id=%s", (owner_id, class_id))
            return int(cur.rowcount)
