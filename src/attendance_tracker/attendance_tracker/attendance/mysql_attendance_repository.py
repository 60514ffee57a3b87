from __future__ import annotations

from typing import Dict, List, Optional, Sequence

from ..core.enums import AttendanceMark
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone, in_clause
from .model import AttendanceSession, RollCallEntry
from .repository import AttendanceRepository


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def find_sessions(
        self,
        owner_id: int,
        *,
        class_id: Optional[int] = None,
        subject_id: Optional[int] = None,
        student_id: Optional[int] = None,
        require_records: bool = False,
    ) -> Sequence[AttendanceSession]:
        where = ["s.owner_id=%s"]
        params: list = [owner_id]
        if class_id is not None:
            where.append("s.class_id=%s")
            params.append(class_id)
        if subject_id is not None:
            where.append("s.subject_id=%s")
            params.append(subject_id)
        if student_id is not None:
            where.append("EXISTS (SELECT 1 FROM attendance_records r WHERE r.session_id=s.session_id AND r.student_id=%s)")
            params.append(student_id)
        if require_records:
            where.append("EXISTS (SELECT 1 FROM attendance_records r WHERE r.session_id=s.session_id)")

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT s.session_id, s.owner_id, s.class_id, s.subject_id, s.session_date,
                       s.present_count, s.absent_count
                FROM attendance_sessions s
                WHERE {" AND ".join(where)}
                ORDER BY s.session_date, s.session_id
                """,
                tuple(params),
            )
            rows = fetchall(cur)
            if not rows:
                return []

            ids = [int(r["session_id"]) for r in rows]
            cur.execute(
                f"""
                SELECT session_id, student_id, status
                FROM attendance_records
                WHERE session_id IN ({in_clause(ids)})
                ORDER BY session_id, position
                """,
                tuple(ids),
            )
            entries: Dict[int, List[RollCallEntry]] = {sid: [] for sid in ids}
            for r in fetchall(cur):
                entries[int(r["session_id"])].append(
                    RollCallEntry(student_id=int(r["student_id"]), status=AttendanceMark(r["status"]))
                )

            return [
                AttendanceSession(
                    session_id=int(r["session_id"]),
                    owner_id=int(r["owner_id"]),
                    class_id=int(r["class_id"]),
                    subject_id=int(r["subject_id"]),
                    session_date=r["session_date"],
                    records=tuple(entries[int(r["session_id"])]),
                    present_count=int(r["present_count"]),
                    absent_count=int(r["absent_count"]),
                )
                for r in rows
            ]

    def save_session(self, session: AttendanceSession) -> int:
        # Header and record rows share one transaction.
        with db_cursor(self._conn_factory) as (_, cur):
            if session.session_id is None:
                cur.execute(
                    """
                    INSERT INTO attendance_sessions(owner_id, class_id, subject_id, session_date, present_count, absent_count)
                    VALUES(%s,%s,%s,%s,%s,%s)
                    """,
                    (
                        session.owner_id,
                        session.class_id,
                        session.subject_id,
                        session.session_date,
                        session.present_count,
                        session.absent_count,
                    ),
                )
                session_id = int(cur.lastrowid)
            else:
                session_id = int(session.session_id)
                cur.execute(
                    """
                    UPDATE attendance_sessions
                    SET class_id=%s, subject_id=%s, session_date=%s, present_count=%s, absent_count=%s
                    WHERE session_id=%s AND owner_id=%s
                    """,
                    (
                        session.class_id,
                        session.subject_id,
                        session.session_date,
                        session.present_count,
                        session.absent_count,
                        session_id,
                        session.owner_id,
                    ),
                )
                cur.execute(
                    "SELECT session_id FROM attendance_sessions WHERE session_id=%s AND owner_id=%s",
                    (session_id, session.owner_id),
                )
                if not fetchone(cur):
                    return 0
                cur.execute("DELETE FROM attendance_records WHERE session_id=%s", (session_id,))

            if session.records:
                cur.executemany(
                    "INSERT INTO attendance_records(session_id, position, student_id, status) VALUES(%s,%s,%s,%s)",
                    [
                        (session_id, pos, entry.student_id, entry.status.value)
                        for pos, entry in enumerate(session.records)
                    ],
                )
            return session_id

    def delete_session(self, owner_id: int, session_id: int) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_sessions WHERE owner_id=%s AND session_id=%s",
                (owner_id, session_id),
            )
            return cur.rowcount > 0

    def delete_for_class(self, owner_id: int, class_id: int) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "DELETE FROM attendance_sessions WHERE owner_id=%s AND class_id=%s",
                (owner_id, class_id),
            )
            return int(cur.rowcount)
