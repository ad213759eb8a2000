from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..core.enums import Role
from .model import User


class UserRepository(Protocol):
    """Repository interface for User.

    Services depend on this interface, not on a concrete database.
    """

    def get_by_id(self, user_id: int) -> Optional[User]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[User]:
        raise NotImplementedError

    def exists(self, *, email: str, employee_code: str) -> bool:
        raise NotImplementedError

    def create_user(
        self,
        *,
        employee_code: str,
        name: str,
        email: str,
        password_hash: str,
        role: Role,
        department: Optional[str],
    ) -> Optional[int]:
        """Return the new id, or None when email/code is already taken."""

        raise NotImplementedError

    def list_by_role(self, role: Role) -> Sequence[User]:
        raise NotImplementedError
