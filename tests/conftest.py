from __future__ import annotations

from datetime import date, datetime
from typing import Optional
from zoneinfo import ZoneInfo

import pytest

from src.hrms_lite.hrms_lite.attendance.model import AttendanceRecord
from src.hrms_lite.hrms_lite.container import wire
from src.hrms_lite.hrms_lite.core.constants import (
    MSG_ATTENDANCE_EXISTS,
    MSG_EMAIL_EXISTS,
    MSG_EMPLOYEE_ID_EXISTS,
    MSG_EMPLOYEE_NOT_FOUND,
)
from src.hrms_lite.hrms_lite.core.enums import AttendanceStatus
from src.hrms_lite.hrms_lite.core.exceptions import ConflictError, NotFoundError
from src.hrms_lite.hrms_lite.employees.model import Employee
from src.hrms_lite.hrms_lite.main import create_app


class InMemoryAttendance:
    """Ledger fake that enforces the (employee_id, work_date) unique key like the real table."""

    def __init__(self, employees: Optional["InMemoryEmployees"] = None):
        self.employees = employees
        self.records: dict[int, AttendanceRecord] = {}
        self._by_key: dict[tuple[str, date], int] = {}
        self._id = 0

    def list_records(self, *, employee_id=None):
        items = [r for r in self.records.values() if employee_id is None or r.employee_id == employee_id]
        items.sort(key=lambda r: (r.work_date, r.id), reverse=True)
        return items

    def get_for_employee_and_date(self, employee_id: str, work_date: date):
        for r in self.records.values():
            if r.employee_id == employee_id and r.work_date == work_date:
                return r
        return None

    def create(self, *, employee_id, work_date, status, created_at) -> int:
        if self.employees is not None and not self.employees.get_by_employee_id(employee_id):
            raise NotFoundError(MSG_EMPLOYEE_NOT_FOUND)
        if (employee_id, work_date) in self._by_key:
            raise ConflictError(MSG_ATTENDANCE_EXISTS)
        self._id += 1
        self.records[self._id] = AttendanceRecord(
            id=self._id,
            employee_id=employee_id,
            work_date=work_date,
            status=status,
            created_at=created_at,
        )
        self._by_key[(employee_id, work_date)] = self._id
        return self._id

    def delete_for_employee(self, employee_id: str) -> int:
        ids = [k for k, r in self.records.items() if r.employee_id == employee_id]
        for k in ids:
            r = self.records.pop(k)
            del self._by_key[(r.employee_id, r.work_date)]
        return len(ids)

    def count_by_status(self, *, employee_id=None, work_date=None):
        counts = {s: 0 for s in AttendanceStatus}
        for r in self.records.values():
            if employee_id is not None and r.employee_id != employee_id:
                continue
            if work_date is not None and r.work_date != work_date:
                continue
            counts[r.status] += 1
        return counts

    def count(self) -> int:
        return len(self.records)


class InMemoryEmployees:
    """Directory fake enforcing the employee_id / email unique keys."""

    def __init__(self):
        self.attendance: Optional[InMemoryAttendance] = None
        self.employees: dict[int, Employee] = {}
        self._id = 0

    def list_all(self):
        return sorted(self.employees.values(), key=lambda e: (e.created_at, e.id), reverse=True)

    def get_by_id(self, id: int):
        return self.employees.get(int(id))

    def get_by_employee_id(self, employee_id: str):
        return next((e for e in self.employees.values() if e.employee_id == employee_id), None)

    def get_by_email(self, email: str):
        return next((e for e in self.employees.values() if e.email == email), None)

    def create(self, *, employee_id, full_name, email, department, created_at) -> int:
        if self.get_by_employee_id(employee_id):
            raise ConflictError(MSG_EMPLOYEE_ID_EXISTS)
        if self.get_by_email(email):
            raise ConflictError(MSG_EMAIL_EXISTS)
        self._id += 1
        self.employees[self._id] = Employee(
            id=self._id,
            employee_id=employee_id,
            full_name=full_name,
            email=email,
            department=department,
            created_at=created_at,
        )
        return self._id

    def delete_with_attendance(self, *, id: int, employee_id: str) -> bool:
        if self.attendance is not None:
            self.attendance.delete_for_employee(employee_id)
        return self.employees.pop(int(id), None) is not None

    def count(self) -> int:
        return len(self.employees)

    def add(self, employee_id: str, full_name: str = "Jane Doe", email: Optional[str] = None, *, created_at=None) -> Employee:
        """Test helper: insert directly, bypassing the service."""
        id = self.create(
            employee_id=employee_id,
            full_name=full_name,
            email=email or f"{employee_id.lower()}@co.com",
            department="Eng",
            created_at=created_at or datetime(2024, 1, 1, 9, 0),
        )
        return self.employees[id]


@pytest.fixture
def tz() -> ZoneInfo:
    return ZoneInfo("UTC")


@pytest.fixture
def fixed_now(tz) -> datetime:
    return datetime(2024, 1, 10, 9, 30, tzinfo=tz)


@pytest.fixture
def employees_repo() -> InMemoryEmployees:
    return InMemoryEmployees()


@pytest.fixture
def attendance_repo(employees_repo) -> InMemoryAttendance:
    repo = InMemoryAttendance(employees_repo)
    employees_repo.attendance = repo
    return repo


@pytest.fixture
def container(employees_repo, attendance_repo, tz):
    return wire(employees_repo=employees_repo, attendance_repo=attendance_repo, tz=tz)


@pytest.fixture
def app(monkeypatch, container):
    monkeypatch.setenv("APP_ENV", "testing")
    return create_app(container=container)


@pytest.fixture
def client(app):
    return app.test_client()
