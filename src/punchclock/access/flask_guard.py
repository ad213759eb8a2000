from __future__ import annotations

from functools import wraps
from typing import Optional

from flask import g, request

from ..core.enums import Role
from ..identity.model import Identity
from ..identity.tokens import bearer_token
from .gate import AccessGate


def auth_required(gate: AccessGate, role: Optional[Role] = None):
    """Run the access gate before the view; the identity lands on ``g.identity``."""

    def decorator(view):
        @wraps(view)
        def wrapper(*args, **kwargs):
            token = bearer_token(request.headers.get("Authorization"))
            g.identity = gate.authorize(token, required_role=role)
            return view(*args, **kwargs)

        return wrapper

    return decorator


def current_identity() -> Identity:
    return g.identity
