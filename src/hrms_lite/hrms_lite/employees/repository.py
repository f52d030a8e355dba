from __future__ import annotations

from datetime import datetime
from typing import Optional, Protocol, Sequence

from .model import Employee


class EmployeeRepository(Protocol):
    """Giao diện repository cho Employee.

    Lưu ý (DIP): tầng service phụ thuộc vào interface này, không phụ thuộc trực tiếp DB cụ thể.
    """

    def list_all(self) -> Sequence[Employee]:
        """Newest first."""
        raise NotImplementedError

    def get_by_id(self, id: int) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        raise NotImplementedError

    def get_by_email(self, email: str) -> Optional[Employee]:
        raise NotImplementedError

    def create(
        self,
        *,
        employee_id: str,
        full_name: str,
        email: str,
        department: str,
        created_at: datetime,
    ) -> int:
        """Insert and return the new internal id.

        Raises ConflictError when the store rejects a duplicate employee ID or email.
        """
        raise NotImplementedError

    def delete_with_attendance(self, *, id: int, employee_id: str) -> bool:
        """Delete the employee's attendance records, then the employee, in one transaction."""
        raise NotImplementedError

    def count(self) -> int:
        raise NotImplementedError
