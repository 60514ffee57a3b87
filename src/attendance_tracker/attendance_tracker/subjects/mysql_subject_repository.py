from __future__ import annotations

from typing import Dict, FrozenSet, List, Mapping, Optional, Sequence

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import Subject
from .repository import SubjectRepository


class MySQLSubjectRepository(SubjectRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    @staticmethod
    def _load_links(cur, subject_ids: Sequence[int]):
        assigned: Dict[int, List[str]] = {sid: [] for sid in subject_ids}
        excluded: Dict[int, Dict[str, set]] = {sid: {} for sid in subject_ids}
        if not subject_ids:
            return assigned, excluded

        cur.execute(
            f"""
            SELECT subject_id, class_name
            FROM subject_assigned_classes
            WHERE subject_id IN ({in_clause(subject_ids)})
            ORDER BY subject_id, position
            """,
            tuple(subject_ids),
        )
        for r in fetchall(cur):
            assigned[int(r["subject_id"])].append(r["class_name"])

        cur.execute(
            f"""
            SELECT subject_id, class_name, student_id
            FROM subject_exclusions
            WHERE subject_id IN ({in_clause(subject_ids)})
            ORDER BY subject_id, class_name, student_id
            """,
            tuple(subject_ids),
        )
        for r in fetchall(cur):
            excluded[int(r["subject_id"])].setdefault(r["class_name"], set()).add(int(r["student_id"]))

        return assigned, excluded

    def _hydrate(self, cur, rows: List[dict]) -> List[Subject]:
        ids = [int(r["subject_id"]) for r in rows]
        assigned, excluded = self._load_links(cur, ids)
        return [
            Subject(
                subject_id=int(r["subject_id"]),
                owner_id=int(r["owner_id"]),
                name=r["name"],
                assigned_classes=tuple(assigned[int(r["subject_id"])]),
                exclusions={k: frozenset(v) for k, v in excluded[int(r["subject_id"])].items()},
                created_at=r.get("created_at"),
            )
            for r in rows
        ]

    def list_for_owner(self, owner_id: int) -> Sequence[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT subject_id, owner_id, name, created_at
                FROM subjects
                WHERE owner_id=%s
                ORDER BY subject_id
                """,
                (owner_id,),
            )
            return self._hydrate(cur, fetchall(cur))

    def get(self, owner_id: int, subject_id: int) -> Optional[Subject]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT subject_id, owner_id, name, created_at FROM subjects WHERE owner_id=%s AND subject_id=%s",
                (owner_id, subject_id),
            )
            row = fetchone(cur)
            if not row:
                return None
            return self._hydrate(cur, [row])[0]

    def create(self, *, owner_id: int, name: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("INSERT INTO subjects(owner_id, name) VALUES(%s,%s)", (owner_id, name))
            return int(cur.lastrowid)

    def update_links(
        self,
        owner_id: int,
        subject_id: int,
        *,
        assigned_classes: Sequence[str],
        exclusions: Mapping[str, FrozenSet[int]],
    ) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT subject_id FROM subjects WHERE owner_id=%s AND subject_id=%s FOR UPDATE",
                (owner_id, subject_id),
            )
            if not fetchone(cur):
                return False

            cur.execute("DELETE FROM subject_assigned_classes WHERE subject_id=%s", (subject_id,))
            cur.execute("DELETE FROM subject_exclusions WHERE subject_id=%s", (subject_id,))

            if assigned_classes:
                cur.executemany(
                    "INSERT INTO subject_assigned_classes(subject_id, position, class_name) VALUES(%s,%s,%s)",
                    [(subject_id, pos, name) for pos, name in enumerate(assigned_classes)],
                )
            rows = [
                (subject_id, class_name, student_id)
                for class_name, student_ids in exclusions.items()
                for student_id in sorted(student_ids)
            ]
            if rows:
                cur.executemany(
                    "INSERT INTO subject_exclusions(subject_id, class_name, student_id) VALUES(%s,%s,%s)",
                    rows,
                )
            return True

    def delete(self, owner_id: int, subject_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM subjects WHERE owner_id=%s AND subject_id=%s", (owner_id, subject_id))
            return cur.rowcount > 0
