from __future__ import annotations

import logging
from typing import Optional

from werkzeug.security import generate_password_hash

from ..access.gate import require_admin
from ..common.validators import require_email, require_min_length, require_non_empty
from ..core.constants import MIN_PASSWORD_LENGTH
from ..core.enums import Role
from ..core.exceptions import ConflictError, ValidationError
from .repository import UserRepository

logger = logging.getLogger(__name__)


class EmployeeService:
    """Use case: manage employee accounts (admin)."""

    def __init__(self, users: UserRepository):
        self._users = users

    def list_employees(self, *, requester_role: Role) -> list[dict]:
        require_admin(requester_role)

        return [
            {**u.public_view(), "created_at": u.created_at.isoformat() if u.created_at else None}
            for u in self._users.list_by_role(Role.EMPLOYEE)
        ]

    def create_employee(
        self,
        *,
        requester_role: Role,
        employee_code: str,
        name: str,
        email: str,
        password: str,
        department: Optional[str] = None,
    ) -> int:
        require_admin(requester_role)

        employee_code = require_non_empty(employee_code, "Employee ID")
        name = require_non_empty(name, "Name")
        email = require_email(email)
        require_min_length(password, "Password", MIN_PASSWORD_LENGTH)
        if department is not None and not isinstance(department, str):
            raise ValidationError("Department must be text")
        department = (department or "").strip() or None

        if self._users.exists(email=email, employee_code=employee_code):
            raise ConflictError("Employee ID or email already exists")

        user_id = self._users.create_user(
            employee_code=employee_code,
            name=name,
            email=email,
            password_hash=generate_password_hash(password),
            role=Role.EMPLOYEE,
            department=department,
        )
        if user_id is None:
            raise ConflictError("Employee ID or email already exists")

        logger.info("Created employee %s (user_id=%s)", employee_code, user_id)
        return user_id
