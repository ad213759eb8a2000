from __future__ import annotations

import logging
from typing import Optional

from ..core.enums import Role
from ..core.exceptions import ForbiddenError
from ..identity.model import Identity
from ..identity.tokens import TokenService

logger = logging.getLogger(__name__)


def require_role(identity: Identity, role: Role) -> None:
    if identity.role != role:
        logger.warning("user_id=%s (%s) denied: %s role required", identity.user_id, identity.role.value, role.value)
        raise ForbiddenError(f"{role.value.capitalize()} access required")


def require_admin(requester_role: Role) -> None:
    if requester_role != Role.ADMIN:
        logger.warning("role=%s denied: admin role required", getattr(requester_role, "value", requester_role))
        raise ForbiddenError("Admin access required")


def require_owner_or_admin(requester_id: int, requester_role: Role, target_user_id: int) -> None:
    """Non-admin requesters may only touch their own data."""
    if requester_role == Role.ADMIN:
        return
    if int(target_user_id) != int(requester_id):
        logger.warning("user_id=%s denied access to user_id=%s data", requester_id, target_user_id)
        raise ForbiddenError("You can only access your own records")


class AccessGate:
    """Single authorization point consulted before every protected operation.

    Stateless: each call verifies the claim from scratch.
    """

    def __init__(self, tokens: TokenService):
        self._tokens = tokens

    def authorize(
        self,
        token: Optional[str],
        *,
        required_role: Optional[Role] = None,
        target_user_id: Optional[int] = None,
    ) -> Identity:
        identity = self._tokens.verify(token)

        if required_role is not None:
            require_role(identity, required_role)
        if target_user_id is not None:
            require_owner_or_admin(identity.user_id, identity.role, target_user_id)

        return identity
