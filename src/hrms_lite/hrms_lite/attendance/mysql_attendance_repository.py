from __future__ import annotations

from datetime import date, datetime
from typing import Dict, Optional, Sequence

from ..core.constants import MSG_ATTENDANCE_EXISTS, MSG_EMPLOYEE_NOT_FOUND
from ..core.enums import AttendanceStatus
from ..core.exceptions import ConflictError, NotFoundError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, duplicate_key_name, fetchall, fetchone, is_missing_reference
from .model import AttendanceRecord
from .repository import AttendanceRepository


def _row_to_record(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        id=int(r["id"]),
        employee_id=r["employee_id"],
        work_date=r["work_date"],
        status=AttendanceStatus(r["status"]),
        created_at=r["created_at"],
    )


class MySQLAttendanceRepository(AttendanceRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def list_records(self, *, employee_id: Optional[str] = None) -> Sequence[AttendanceRecord]:
        sql = "SELECT id, employee_id, work_date, status, created_at FROM attendance_records"
        params: tuple = ()
        if employee_id:
            sql += " WHERE employee_id=%s"
            params = (employee_id,)
        sql += " ORDER BY work_date DESC, id DESC"

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, params)
            return [_row_to_record(r) for r in fetchall(cur)]

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT id, employee_id, work_date, status, created_at
                FROM attendance_records
                WHERE employee_id=%s AND work_date=%s
                """,
                (employee_id, work_date),
            )
            r = fetchone(cur)
            return _row_to_record(r) if r else None

    def create(
        self,
        *,
        employee_id: str,
        work_date: date,
        status: AttendanceStatus,
        created_at: datetime,
    ) -> int:
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute(
                    """
                    INSERT INTO attendance_records(employee_id, work_date, status, created_at)
                    VALUES(%s,%s,%s,%s)
                    """,
                    (employee_id, work_date, status.value, created_at),
                )
                return int(cur.lastrowid)
        except Exception as e:
            if duplicate_key_name(e) is not None:
                raise ConflictError(MSG_ATTENDANCE_EXISTS) from e
            if is_missing_reference(e):
                raise NotFoundError(MSG_EMPLOYEE_NOT_FOUND) from e
            raise

    def count_by_status(
        self,
        *,
        employee_id: Optional[str] = None,
        work_date: Optional[date] = None,
    ) -> Dict[AttendanceStatus, int]:
        where: list[str] = []
        params: list = []
        if employee_id is not None:
            where.append("employee_id=%s")
            params.append(employee_id)
        if work_date is not None:
            where.append("work_date=%s")
            params.append(work_date)

        sql = "SELECT status, COUNT(*) AS total FROM attendance_records"
        if where:
            sql += " WHERE " + " AND ".join(where)
        sql += " GROUP BY status"

        counts = {s: 0 for s in AttendanceStatus}
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(sql, tuple(params))
            for r in fetchall(cur):
                counts[AttendanceStatus(r["status"])] = int(r["total"])
        return counts

    def count(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("SELECT COUNT(*) AS total FROM attendance_records")
            row = fetchone(cur)
            return int(row["total"]) if row else 0
