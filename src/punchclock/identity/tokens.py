"""
Token service: issues and verifies signed identity claims (JWT).
"""
from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from ..core.enums import Role
from ..core.exceptions import Unauthenticated
from ..users.model import User
from .model import Identity

ISSUER = "punchclock"


class TokenService:
    def __init__(self, secret: str, *, algorithm: str = "HS256", expires_minutes: int = 480):
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._expires = timedelta(minutes=int(expires_minutes))

    def issue(self, user: User, *, now: Optional[datetime] = None) -> str:
        """
        Issue a signed token for an authenticated user

        Returns:
            str: encoded JWT carrying user id and role
        """
        now = now or datetime.now(timezone.utc)
        payload: Dict[str, Any] = {
            "iss": ISSUER,
            "sub": str(user.user_id),
            "role": user.role.value,
            "name": user.name,
            "email": user.email,
            "iat": int(now.timestamp()),
            "exp": int((now + self._expires).timestamp()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: Optional[str]) -> Identity:
        """
        Verify and decode a bearer token

        Raises:
            Unauthenticated: If token is missing, expired, tampered or malformed
        """
        if not token:
            raise Unauthenticated("Access token required")

        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                issuer=ISSUER,
                options={"require": ["sub", "role", "exp", "iat"]},
            )
        except jwt.ExpiredSignatureError:
            raise Unauthenticated("Token expired")
        except jwt.InvalidTokenError:
            raise Unauthenticated("Invalid token")

        try:
            return Identity(
                user_id=int(payload["sub"]),
                role=Role(payload["role"]),
                name=payload.get("name"),
                email=payload.get("email"),
            )
        except (TypeError, ValueError):
            raise Unauthenticated("Invalid token")


def bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.strip().partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
