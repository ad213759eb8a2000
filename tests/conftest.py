from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

import pytest

from punchclock.container import Container, assemble
from punchclock.core.enums import Role
from punchclock.identity.tokens import TokenService
from punchclock.main import create_app
from tests.fakes import (
    FakeClock,
    InMemoryAttendance,
    InMemoryDashboard,
    InMemoryLeaves,
    InMemoryUsers,
    make_user,
)

JWT_SECRET = "test-jwt-secret"


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 9, 0, 0)


@dataclass
class Stores:
    users: InMemoryUsers
    attendance: InMemoryAttendance
    leaves: InMemoryLeaves
    dashboard: InMemoryDashboard


@pytest.fixture
def stores() -> Stores:
    users = InMemoryUsers(
        [
            make_user(1, role=Role.ADMIN, password="admin123", name="Admin User"),
            make_user(2, name="Alice"),
            make_user(3, name="Bob"),
        ]
    )
    attendance = InMemoryAttendance()
    leaves = InMemoryLeaves(users)
    return Stores(users, attendance, leaves, InMemoryDashboard(users, attendance, leaves))


@pytest.fixture
def tokens() -> TokenService:
    return TokenService(JWT_SECRET, expires_minutes=60)


@pytest.fixture
def clock(fixed_now) -> FakeClock:
    return FakeClock(fixed_now)


@pytest.fixture
def container(stores, tokens, clock) -> Container:
    c = assemble(
        users_repo=stores.users,
        attendance_repo=stores.attendance,
        leaves_repo=stores.leaves,
        dashboard_repo=stores.dashboard,
        tokens=tokens,
        dashboard_workers=2,
        dashboard_timeout=2.0,
        clock=clock,
    )
    yield c
    c.dashboard_service.close()


@pytest.fixture
def client(container):
    app = create_app(settings_module="config.testing", container=container)
    return app.test_client()


@pytest.fixture
def auth_header(stores, tokens):
    def _header(user_id: int) -> dict:
        return {"Authorization": f"Bearer {tokens.issue(stores.users.get_by_id(user_id))}"}

    return _header
