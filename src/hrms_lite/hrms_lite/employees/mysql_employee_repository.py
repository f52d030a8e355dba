from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..core.constants import MSG_EMAIL_EXISTS, MSG_EMPLOYEE_ID_EXISTS
from ..core.exceptions import ConflictError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, duplicate_key_name, fetchall, fetchone
from .model import Employee
from .repository import EmployeeRepository

_COLUMNS = "id, employee_id, full_name, email, department, created_at"

_DUPLICATE_MESSAGES = {
    "uq_employees_employee_id": MSG_EMPLOYEE_ID_EXISTS,
    "uq_employees_email": MSG_EMAIL_EXISTS,
}


def _row_to_employee(r: dict) -> Employee:
    return Employee(
        id=int(r["id"]),
        employee_id=r["employee_id"],
        full_name=r["full_name"],
        email=r["email"],
        department=r["department"],
        created_at=r["created_at"],
    )


class MySQLEmployeeRepository(EmployeeRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_all(self) -> Sequence[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees ORDER BY created_at DESC, id DESC")
            return [_row_to_employee(r) for r in fetchall(cur)]

    def _get_one(self, where: str, value) -> Optional[Employee]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_COLUMNS} FROM employees WHERE {where}=%s", (value,))
            row = fetchone(cur)
            return _row_to_employee(row) if row else None

    def get_by_id(self, id: int) -> Optional[Employee]:
        return self._get_one("id", int(id))

    def get_by_employee_id(self, employee_id: str) -> Optional[Employee]:
        return self._get_one("employee_id", employee_id)

    def get_by_email(self, email: str) -> Optional[Employee]:
        return self._get_one("email", email)

    def create(
        self,
        *,
        employee_id: str,
        full_name: str,
        email: str,
        department: str,
        created_at: datetime,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO employees(employee_id, full_name, email, department, created_at)
                    VALUES(%s,%s,%s,%s,%s)
                    """,
                    (employee_id, full_name, email, department, created_at),
                )
                return int(cur.lastrowid)
        except Exception as e:
            key = duplicate_key_name(e)
            if key is None:
                raise
            # Unknown key names fall back to the employee ID message (checked first by the service too).
            raise ConflictError(_DUPLICATE_MESSAGES.get(key, MSG_EMPLOYEE_ID_EXISTS)) from e

    def delete_with_attendance(self, *, id: int, employee_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("DELETE FROM attendance_records WHERE employee_id=%s", (employee_id,))
            cur.execute("DELETE FROM employees WHERE id=%s", (int(id),))
            return cur.rowcount > 0

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM employees")
            row = fetchone(cur)
            return int(row["total"]) if row else 0
