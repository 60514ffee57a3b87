from __future__ import annotations

from typing import Optional, Protocol

from .model import Account


class AccountRepository(Protocol):
    """Repository interface for Account.

    Note (DIP): the service layer depends on this interface, not on a concrete DB.
    """

    def get_by_login_id(self, login_id: str) -> Optional[Account]:
        raise NotImplementedError

    def create_account(self, *, login_id: str, username: str, password_hash: str) -> int:
        raise NotImplementedError
