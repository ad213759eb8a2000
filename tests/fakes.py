from __future__ import annotations

import threading
from dataclasses import replace
from datetime import date, datetime, time, timedelta
from typing import Optional

from werkzeug.security import generate_password_hash

from punchclock.attendance.model import AttendanceRecord
from punchclock.core.enums import AttendanceStatus, LeaveStatus, Role
from punchclock.leaves.model import LeaveRequest
from punchclock.users.model import User


class FakeClock:
    def __init__(self, now: datetime):
        self.now = now

    def __call__(self) -> datetime:
        return self.now

    def advance(self, **kwargs) -> None:
        self.now = self.now + timedelta(**kwargs)


def make_user(user_id: int, *, role: Role = Role.EMPLOYEE, password: str = "secret123", name: str | None = None) -> User:
    return User(
        user_id=user_id,
        employee_code=f"EMP{user_id:03d}",
        name=name or f"User {user_id}",
        email=f"user{user_id}@company.com",
        password_hash=generate_password_hash(password),
        role=role,
        department="IT",
        created_at=datetime(2026, 1, 1, 8, 0, 0),
    )


class InMemoryUsers:
    def __init__(self, users=()):
        self._by_id: dict[int, User] = {u.user_id: u for u in users}

    def add(self, user: User) -> User:
        self._by_id[user.user_id] = user
        return user

    def get_by_id(self, user_id: int) -> Optional[User]:
        return self._by_id.get(int(user_id))

    def get_by_email(self, email: str) -> Optional[User]:
        return next((u for u in self._by_id.values() if u.email == email), None)

    def exists(self, *, email: str, employee_code: str) -> bool:
        return any(u.email == email or u.employee_code == employee_code for u in self._by_id.values())

    def create_user(self, *, employee_code, name, email, password_hash, role, department) -> Optional[int]:
        if self.exists(email=email, employee_code=employee_code):
            return None
        user_id = max(self._by_id, default=0) + 1
        self._by_id[user_id] = User(
            user_id=user_id,
            employee_code=employee_code,
            name=name,
            email=email,
            password_hash=password_hash,
            role=role,
            department=department,
            created_at=datetime(2026, 1, 1, 8, 0, 0),
        )
        return user_id

    def list_by_role(self, role: Role):
        return sorted((u for u in self._by_id.values() if u.role == role), key=lambda u: u.user_id)


class InMemoryAttendance:
    """Emulates the store's atomic open-punch check with a lock."""

    def __init__(self):
        self._records: dict[int, AttendanceRecord] = {}
        self._id = 0
        self._lock = threading.Lock()

    def all(self) -> list[AttendanceRecord]:
        return list(self._records.values())

    def add_closed(self, user_id: int, work_date: date, total_hours: float) -> AttendanceRecord:
        self._id += 1
        rec = AttendanceRecord(
            record_id=self._id,
            user_id=user_id,
            work_date=work_date,
            punch_in=time(9, 0),
            punch_out=time(17, 0),
            total_hours=total_hours,
        )
        self._records[rec.record_id] = rec
        return rec

    def get_recent_for_user(self, user_id: int, limit: int):
        items = [r for r in self._records.values() if r.user_id == user_id]
        items.sort(key=lambda r: (r.work_date, r.record_id), reverse=True)
        return items[:limit]

    def get_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        items = [r for r in self._records.values() if r.user_id == user_id and r.work_date == work_date]
        return max(items, key=lambda r: r.record_id) if items else None

    def get_open_for_user_and_date(self, user_id: int, work_date: date) -> Optional[AttendanceRecord]:
        return next(
            (r for r in self._records.values() if r.user_id == user_id and r.work_date == work_date and r.is_open),
            None,
        )

    def open_punch(self, *, user_id: int, work_date: date, punch_in: time, status=AttendanceStatus.PRESENT) -> Optional[int]:
        with self._lock:
            if self.get_open_for_user_and_date(user_id, work_date):
                return None
            self._id += 1
            self._records[self._id] = AttendanceRecord(
                record_id=self._id,
                user_id=user_id,
                work_date=work_date,
                punch_in=punch_in,
                punch_out=None,
                total_hours=None,
                status=status,
            )
            return self._id

    def close_punch(self, *, record_id: int, punch_out: time, total_hours: float) -> bool:
        with self._lock:
            rec = self._records.get(record_id)
            if not rec or not rec.is_open:
                return False
            self._records[record_id] = replace(rec, punch_out=punch_out, total_hours=total_hours)
            return True


class InMemoryLeaves:
    def __init__(self, users: InMemoryUsers):
        self._users = users
        self._requests: dict[int, LeaveRequest] = {}
        self._id = 0
        self._lock = threading.Lock()

    def create(self, *, user_id, leave_type, start_date, end_date, reason, applied_at) -> int:
        self._id += 1
        self._requests[self._id] = LeaveRequest(
            request_id=self._id,
            user_id=user_id,
            leave_type=leave_type,
            start_date=start_date,
            end_date=end_date,
            reason=reason,
            status=LeaveStatus.PENDING,
            applied_at=applied_at,
        )
        return self._id

    def count(self) -> int:
        return len(self._requests)

    def get(self, request_id: int) -> Optional[LeaveRequest]:
        return self._requests.get(int(request_id))

    def _newest_first(self, items):
        return sorted(items, key=lambda r: (r.applied_at, r.request_id), reverse=True)

    def list_all_with_requester(self):
        out = []
        for r in self._requests.values():
            user = self._users.get_by_id(r.user_id)
            out.append(replace(r, employee_name=user.name, employee_code=user.employee_code))
        return self._newest_first(out)

    def list_for_user(self, user_id: int):
        return self._newest_first(r for r in self._requests.values() if r.user_id == user_id)

    def decide(self, *, request_id: int, status: LeaveStatus, decided_by: int) -> bool:
        with self._lock:
            req = self._requests.get(int(request_id))
            if not req or req.status != LeaveStatus.PENDING:
                return False
            self._requests[req.request_id] = replace(req, status=status, approved_by=int(decided_by))
            return True


class InMemoryDashboard:
    """Metrics computed over the other in-memory stores."""

    def __init__(self, users: InMemoryUsers, attendance: InMemoryAttendance, leaves: InMemoryLeaves):
        self._users = users
        self._attendance = attendance
        self._leaves = leaves

    def count_employees(self) -> int:
        return len(self._users.list_by_role(Role.EMPLOYEE))

    def count_present_on(self, work_date: date) -> int:
        employees = {u.user_id for u in self._users.list_by_role(Role.EMPLOYEE)}
        return len(
            {r.user_id for r in self._attendance.all() if r.work_date == work_date and r.punch_in and r.user_id in employees}
        )

    def count_pending_leaves(self, user_id: Optional[int] = None) -> int:
        return sum(
            1
            for r in self._leaves.list_all_with_requester()
            if r.status == LeaveStatus.PENDING and (user_id is None or r.user_id == user_id)
        )

    def average_hours_since(self, start_date: date) -> Optional[float]:
        hours = [r.total_hours for r in self._attendance.all() if r.work_date >= start_date and r.total_hours is not None]
        return sum(hours) / len(hours) if hours else None

    def count_records_since(self, user_id: int, start_date: date) -> int:
        return sum(1 for r in self._attendance.all() if r.user_id == user_id and r.work_date >= start_date)

    def sum_hours_since(self, user_id: int, start_date: date) -> Optional[float]:
        hours = [
            r.total_hours
            for r in self._attendance.all()
            if r.user_id == user_id and r.work_date >= start_date and r.total_hours is not None
        ]
        return sum(hours) if hours else None
