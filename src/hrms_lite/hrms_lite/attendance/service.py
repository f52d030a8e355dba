from __future__ import annotations

from datetime import date, datetime
from typing import Any, Mapping, Optional, Sequence
from zoneinfo import ZoneInfo

from ..common.datetime_utils import now_local, to_calendar_day
from ..common.validators import FieldErrors, require_choice, require_non_empty
from ..core.constants import MSG_ATTENDANCE_EXISTS, MSG_EMPLOYEE_NOT_FOUND
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, NotFoundError
from ..employees.model import Employee
from ..employees.repository import EmployeeRepository
from .model import AttendanceRecord, AttendanceSummary
from .repository import AttendanceRepository

_STATUS_CHOICES = [s.value for s in AttendanceStatus]


class AttendanceService:
    """Use case: the attendance ledger (mark, list, per-employee summary)."""

    def __init__(self, attendance: AttendanceRepository, employees: EmployeeRepository, *, tz: ZoneInfo):
        self._attendance = attendance
        self._employees = employees
        self._tz = tz

    def _require_employee(self, employee_id: str) -> Employee:
        employee = self._employees.get_by_employee_id(employee_id)
        if not employee:
            raise NotFoundError(MSG_EMPLOYEE_NOT_FOUND)
        return employee

    def list_records(self, employee_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        employee_id = (employee_id or "").strip() or None
        return self._attendance.list_records(employee_id=employee_id)

    def mark(self, payload: Mapping[str, Any], *, now: datetime | None = None) -> AttendanceRecord:
        # Malformed input is reported for every field before any lookup happens.
        errors = FieldErrors()
        employee_id = errors.check(require_non_empty, payload.get("employeeId"), "Employee ID")
        work_date: date | None = errors.check(to_calendar_day, payload.get("date"), self._tz)
        if errors.messages:
            errors.check(require_choice, payload.get("status"), "Status", _STATUS_CHOICES)
        errors.raise_if_any()

        # Store the directory's key, not the caller's spelling of it.
        employee_id = self._require_employee(employee_id).employee_id

        if self._attendance.get_for_employee_and_date(employee_id, work_date):
            raise ConflictError(MSG_ATTENDANCE_EXISTS)

        errors.check(require_choice, payload.get("status"), "Status", _STATUS_CHOICES)
        errors.raise_if_any()
        status = AttendanceStatus(payload["status"])

        created_at = (now or now_local(self._tz)).replace(tzinfo=None)
        id = self._attendance.create(
            employee_id=employee_id,
            work_date=work_date,
            status=status,
            created_at=created_at,
        )
        return AttendanceRecord(
            id=id,
            employee_id=employee_id,
            work_date=work_date,
            status=status,
            created_at=created_at,
        )

    def summary(self, employee_id: str) -> AttendanceSummary:
        employee = self._require_employee(employee_id)
        counts = self._attendance.count_by_status(employee_id=employee.employee_id)
        return AttendanceSummary(
            employee_id=employee.employee_id,
            full_name=employee.full_name,
            total_present=counts.get(AttendanceStatus.PRESENT, 0),
            total_absent=counts.get(AttendanceStatus.ABSENT, 0),
        )
