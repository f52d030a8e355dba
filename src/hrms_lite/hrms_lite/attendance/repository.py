from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Optional, Protocol, Sequence

from ..core.enums import AttendanceStatus
from .model import AttendanceRecord


class AttendanceRepository(Protocol):
    def list_records(self, *, employee_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        """Most recent day first; all employees when ``employee_id`` is None."""
        raise NotImplementedError

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: str,
        work_date: date,
        status: AttendanceStatus,
        created_at: datetime,
    ) -> int:
        """Insert and return the new internal id.

        Raises ConflictError when the day is already marked, NotFoundError when
        the employee no longer exists.
        """
        raise NotImplementedError

    def count_by_status(
        self,
        *,
        employee_id: Optional[str] = None,
        work_date: Optional[date] = None,
    ) -> Dict[AttendanceStatus, int]:
        """Counts per status; statuses with no records map to 0."""
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
