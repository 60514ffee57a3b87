from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping

import mysql.connector


@dataclass(frozen=True)
class DBConfig:
    host: str
    port: int
    user: str
    password: str
    database: str

    @classmethod
    def from_mapping(cls, settings: Mapping[str, Any]) -> "DBConfig":
        """Build from a settings ``DB_CONFIG`` dict; ``port`` defaults to 3306."""
        return cls(
            host=str(settings["host"]),
            port=int(settings.get("port", 3306)),
            user=str(settings["user"]),
            password=str(settings.get("password", "")),
            database=str(settings["database"]),
        )


class DatabaseConnection:
    """Opens a fresh connection for every ``db_cursor`` block.

    One instance per container; repositories share it.
    """

    def __init__(self, config: DBConfig):
        self._config = config

    def connect(self):
        return mysql.connector.connect(
            host=self._config.host,
            port=self._config.port,
            user=self._config.user,
            password=self._config.password,
            database=self._config.database,
            autocommit=False,
        )
