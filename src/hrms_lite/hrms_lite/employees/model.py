from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime


@dataclass(frozen=True)
class Employee:
    """Domain entity: Employee.

    ``id`` is the store-assigned handle; ``employee_id`` is the caller-assigned
    business key that every other entity references.
    """

    id: int
    employee_id: str
    full_name: str
    email: str
    department: str
    created_at: datetime

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "fullName": self.full_name,
            "email": self.email,
            "department": self.department,
            "createdAt": self.created_at.isoformat(),
        }
