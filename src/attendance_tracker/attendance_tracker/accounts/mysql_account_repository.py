from __future__ import annotations

from typing import Optional

from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import Account
from .repository import AccountRepository


def _to_account(row: dict) -> Account:
    return Account(
        account_id=int(row["account_id"]),
        login_id=row["login_id"],
        username=row["username"],
        password_hash=row["password_hash"],
    )


class MySQLAccountRepository(AccountRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_by_login_id(self, login_id: str) -> Optional[Account]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "SELECT account_id, login_id, username, password_hash FROM accounts WHERE login_id=%s",
                (login_id,),
            )
            row = fetchone(cur)
            return _to_account(row) if row else None

    def create_account(self, *, login_id: str, username: str, password_hash: str) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "INSERT INTO accounts(login_id, username, password_hash) VALUES(%s,%s,%s)",
                (login_id, username, password_hash),
            )
            return int(cur.lastrowid)
