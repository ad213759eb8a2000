from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from ..core.enums import Role


@dataclass(frozen=True)
class User:
    """Domain entity: User.

    Plain data object; ``password_hash`` is only read by the identity layer.
    """

    user_id: int
    employee_code: str
    name: str
    email: str
    password_hash: str
    role: Role
    department: Optional[str]
    created_at: Optional[datetime] = None

    def public_view(self) -> dict:
        return {
            "id": self.user_id,
            "employee_id": self.employee_code,
            "name": self.name,
            "email": self.email,
            "role": self.role.value,
            "department": self.department,
        }
