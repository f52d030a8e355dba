from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Thực thể miền (domain): Bản ghi chấm công, tối đa một bản ghi cho mỗi nhân viên mỗi ngày."""

    id: int
    employee_id: str
    work_date: date
    status: AttendanceStatus
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "date": self.work_date.isoformat(),
            "status": self.status.value,
            "createdAt": self.created_at.isoformat(),
        }


@dataclass(frozen=True)
class AttendanceSummary:
    """Read-model: per-employee counts derived from the ledger on every request."""

    employee_id: str
    full_name: str
    total_present: int
    total_absent: int

    @property
    def total_days(self) -> int:
        return self.total_present + self.total_absent

    def to_dict(self) -> dict:
        return {
            "employeeId": self.employee_id,
            "fullName": self.full_name,
            "totalPresent": self.total_present,
            "totalAbsent": self.total_absent,
            "totalDays": self.total_days,
        }
