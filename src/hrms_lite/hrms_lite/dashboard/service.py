from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from zoneinfo import ZoneInfo

from ..attendance.repository import AttendanceRepository
from ..common.datetime_utils import now_local
from ..core.enums import AttendanceStatus
from ..employees.repository import EmployeeRepository


@dataclass(frozen=True)
class DashboardStats:
    total_employees: int
    total_attendance: int
    present_today: int
    absent_today: int

    def to_dict(self) -> dict:
        return {
            "totalEmployees": self.total_employees,
            "totalAttendance": self.total_attendance,
            "presentToday": self.present_today,
            "absentToday": self.absent_today,
        }


class DashboardService:
    """Overview counts, recomputed from the store on each call."""

    def __init__(self, employees: EmployeeRepository, attendance: AttendanceRepository, *, tz: ZoneInfo):
        self._employees = employees
        self._attendance = attendance
        self._tz = tz

    def stats(self, *, today: date | None = None) -> DashboardStats:
        today = today or now_local(self._tz).date()
        counts = self._attendance.count_by_status(work_date=today)
        return DashboardStats(
            total_employees=self._employees.count(),
            total_attendance=self._attendance.count(),
            present_today=counts.get(AttendanceStatus.PRESENT, 0),
            absent_today=counts.get(AttendanceStatus.ABSENT, 0),
        )
