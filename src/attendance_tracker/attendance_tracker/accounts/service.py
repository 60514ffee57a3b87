from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from ..common.validators import require_min_length, require_non_empty
from ..core.constants import DEFAULT_TOKEN_TTL_MINUTES, MIN_PASSWORD_LENGTH, TOKEN_ALGORITHM
from ..core.exceptions import AuthenticationError, ValidationError
from .repository import AccountRepository

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LoginResult:
    """What the login endpoint hands back to the client."""

    token: str
    username: str
    login_id: str


class AuthService:
    """Use cases: register, sign in, and resolve a bearer token to an owner id."""

    def __init__(
        self,
        accounts: AccountRepository,
        *,
        secret: str,
        token_ttl_minutes: int = DEFAULT_TOKEN_TTL_MINUTES,
    ):
        if not secret:
            raise ValueError("A token secret is required")
        self._accounts = accounts
        self._secret = secret
        self._ttl = timedelta(minutes=int(token_ttl_minutes))

    def register(self, *, username: str, login_id: str, password: str) -> int:
        username = require_non_empty(username, "Username")
        login_id = require_non_empty(login_id, "User ID")
        require_non_empty(password, "Password")
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)

        if self._accounts.get_by_login_id(login_id):
            raise ValidationError("User ID already exists")

        account_id = self._accounts.create_account(
            login_id=login_id,
            username=username,
            password_hash=generate_password_hash(password),
        )
        logger.info("registered account %s", login_id)
        return account_id

    def login(self, *, login_id: str, password: str, now: Optional[datetime] = None) -> LoginResult:
        login_id = require_non_empty(login_id, "User ID")
        require_non_empty(password, "Password")

        account = self._accounts.get_by_login_id(login_id)
        if not account:
            raise AuthenticationError("Invalid user ID or password")

        try:
            ok = check_password_hash(account.password_hash, password)
        except ValueError:
            # unknown hash method stored in the row
            ok = False
        if not ok:
            raise AuthenticationError("Invalid user ID or password")

        issued = now or datetime.now(timezone.utc)
        token = jwt.encode(
            {
                "sub": str(account.account_id),
                "login": account.login_id,
                "iat": issued,
                "exp": issued + self._ttl,
            },
            self._secret,
            algorithm=TOKEN_ALGORITHM,
        )
        return LoginResult(token=token, username=account.username, login_id=account.login_id)

    def resolve_owner(self, token: Optional[str]) -> int:
        if not token:
            raise AuthenticationError("Access denied")
        try:
            claims = jwt.decode(token, self._secret, algorithms=[TOKEN_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError:
            raise AuthenticationError("Invalid token")

        try:
            return int(claims["sub"])
        except (KeyError, TypeError, ValueError):
            raise AuthenticationError("Invalid token")
