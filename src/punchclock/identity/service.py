from __future__ import annotations

import logging

from werkzeug.security import check_password_hash

from ..core.exceptions import Unauthenticated
from ..users.repository import UserRepository
from .tokens import TokenService

logger = logging.getLogger(__name__)


class AuthService:
    """Use case: authenticate user (login)."""

    def __init__(self, users: UserRepository, tokens: TokenService):
        self._users = users
        self._tokens = tokens

    def login(self, email: str, password: str) -> dict:
        if not isinstance(email, str) or not isinstance(password, str):
            logger.warning("Login rejected: email and password must be strings")
            raise Unauthenticated("Invalid credentials")

        user = self._users.get_by_email(email.strip().lower())
        if not user:
            logger.warning("Login failed for %r: unknown email", email)
            raise Unauthenticated("Invalid credentials")

        try:
            ok = check_password_hash(user.password_hash, password)
        except ValueError:
            # e.g. placeholder hashes like 'CHANGE_ME' or corrupted values
            ok = False

        if not ok:
            logger.warning("Login failed for user_id=%s: bad password", user.user_id)
            raise Unauthenticated("Invalid credentials")

        return {"token": self._tokens.issue(user), "user": user.public_view()}
