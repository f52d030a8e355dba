from __future__ import annotations

from datetime import datetime
from typing import Any, Mapping, Sequence
from zoneinfo import ZoneInfo

from ..common.datetime_utils import now_local
from ..common.validators import FieldErrors, require_email, require_non_empty
from ..core.constants import (
    MAX_EMPLOYEE_ID_LENGTH,
    MAX_TEXT_LENGTH,
    MSG_EMAIL_EXISTS,
    MSG_EMPLOYEE_ID_EXISTS,
    MSG_EMPLOYEE_NOT_FOUND,
)
from ..core.exceptions import ConflictError, NotFoundError
from .model import Employee
from .repository import EmployeeRepository


class EmployeeService:
    """Use case: manage the employee directory."""

    def __init__(self, employees: EmployeeRepository, *, tz: ZoneInfo):
        self._employees = employees
        self._tz = tz

    def list_employees(self) -> Sequence[Employee]:
        return self._employees.list_all()

    def get_employee(self, handle: Any) -> Employee:
        """Resolve an employee by internal id; anything that is not an id is simply not found."""
        try:
            id = int(handle)
        except (TypeError, ValueError):
            raise NotFoundError(MSG_EMPLOYEE_NOT_FOUND)

        employee = self._employees.get_by_id(id)
        if not employee:
            raise NotFoundError(MSG_EMPLOYEE_NOT_FOUND)
        return employee

    def create_employee(self, payload: Mapping[str, Any], *, now: datetime | None = None) -> Employee:
        errors = FieldErrors()
        employee_id = errors.check(require_non_empty, payload.get("employeeId"), "Employee ID", MAX_EMPLOYEE_ID_LENGTH)
        full_name = errors.check(require_non_empty, payload.get("fullName"), "Full name", MAX_TEXT_LENGTH)
        email = errors.check(require_email, payload.get("email"), "Email", MAX_TEXT_LENGTH)
        department = errors.check(require_non_empty, payload.get("department"), "Department", MAX_TEXT_LENGTH)
        errors.raise_if_any()

        # employeeId first, then email: the first duplicate reported wins.
        if self._employees.get_by_employee_id(employee_id):
            raise ConflictError(MSG_EMPLOYEE_ID_EXISTS)
        if self._employees.get_by_email(email):
            raise ConflictError(MSG_EMAIL_EXISTS)

        created_at = (now or now_local(self._tz)).replace(tzinfo=None)
        id = self._employees.create(
            employee_id=employee_id,
            full_name=full_name,
            email=email,
            department=department,
            created_at=created_at,
        )
        return Employee(
            id=id,
            employee_id=employee_id,
            full_name=full_name,
            email=email,
            department=department,
            created_at=created_at,
        )

    def delete_employee(self, handle: Any) -> Employee:
        employee = self.get_employee(handle)
        if not self._employees.delete_with_attendance(id=employee.id, employee_id=employee.employee_id):
            # Deleted concurrently between the lookup and the delete.
            raise NotFoundError(MSG_EMPLOYEE_NOT_FOUND)
        return employee
