from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

from .accounts.mysql_account_repository import MySQLAccountRepository
from .accounts.service import AuthService
from .attendance.mysql_attendance_repository import MySQLAttendanceRepository
from .attendance.service import AttendanceService
from .classes.mysql_class_repository import MySQLClassRepository
from .classes.service import ClassService
from .core.constants import DEFAULT_TOKEN_TTL_MINUTES
from .database.connection import DBConfig, DatabaseConnection
from .scope import DataStore, Repositories
from .students.mysql_student_repository import MySQLStudentRepository
from .students.service import StudentService
from .subjects.mysql_subject_repository import MySQLSubjectRepository
from .subjects.service import SubjectService


@dataclass(frozen=True)
class Container:
    auth_service: AuthService
    class_service: ClassService
    student_service: StudentService
    subject_service: SubjectService
    attendance_service: AttendanceService


def assemble_container(
    repos: Repositories,
    *,
    jwt_secret: str,
    token_ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES,
) -> Container:
    store = DataStore(repos)
    return Container(
        auth_service=AuthService(repos.accounts, secret=jwt_secret, token_ttl_minutes=token_ttl_minutes),
        class_service=ClassService(store),
        student_service=StudentService(store),
        subject_service=SubjectService(store),
        attendance_service=AttendanceService(store),
    )


def build_container(
    *,
    db_config: Mapping[str, Any],
    jwt_secret: str,
    token_ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES,
) -> Container:
    conn = DatabaseConnection(DBConfig.from_mapping(db_config))

    repos = Repositories(
        accounts=MySQLAccountRepository(conn),
        classes=MySQLClassRepository(conn),
        students=MySQLStudentRepository(conn),
        subjects=MySQLSubjectRepository(conn),
        attendance=MySQLAttendanceRepository(conn),
    )
    return assemble_container(repos, jwt_secret=jwt_secret, token_ttl_minutes=token_ttl_minutes)
