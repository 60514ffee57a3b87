from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class Account:
    """Domain entity: the account that owns classes, students, subjects and sessions.

    Note: Plain data object (no DB access code).
    """

    account_id: int
    login_id: str
    username: str
    password_hash: str
