from __future__ import annotations

from datetime import date, datetime
from pathlib import Path

import pytest
from mysql.connector import errors as mysql_errors

from src.hrms_lite.hrms_lite.attendance.mysql_attendance_repository import MySQLAttendanceRepository
from src.hrms_lite.hrms_lite.core.enums import AttendanceStatus
from src.hrms_lite.hrms_lite.core.exceptions import ConflictError, NotFoundError
from src.hrms_lite.hrms_lite.database.bootstrap import iter_sql_statements
from src.hrms_lite.hrms_lite.employees.mysql_employee_repository import MySQLEmployeeRepository


class FakeCursor:
    def __init__(self, conn: "FakeConnection"):
        self._conn = conn
        self._rows: list = []
        self.rowcount = 0
        self.lastrowid = None

    def execute(self, sql, params=()):
        self._conn.executed.append((" ".join(sql.split()), tuple(params)))
        step = self._conn.factory.steps.pop(0) if self._conn.factory.steps else {}
        if "raise" in step:
            raise step["raise"]
        self._rows = step.get("rows", [])
        self.rowcount = step.get("rowcount", len(self._rows))
        self.lastrowid = step.get("lastrowid")

    def fetchone(self):
        return self._rows[0] if self._rows else None

    def fetchall(self):
        return list(self._rows)

    def close(self):
        pass


class FakeConnection:
    def __init__(self, factory: "FakeConnFactory"):
        self.factory = factory
        self.executed: list = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=False):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeConnFactory:
    """Stands in for DatabaseConnection; each execute() consumes one scripted step."""

    def __init__(self, *steps: dict):
        self.steps = list(steps)
        self.connections: list[FakeConnection] = []

    def connect(self, **kwargs):
        conn = FakeConnection(self)
        self.connections.append(conn)
        return conn


def _dup(key: str) -> mysql_errors.IntegrityError:
    return mysql_errors.IntegrityError(msg=f"Duplicate entry 'x' for key 'employees.{key}'", errno=1062)


EMP_ROW = {
    "id": 7,
    "employee_id": "EMP001",
    "full_name": "Jane Doe",
    "email": "jane@co.com",
    "department": "Eng",
    "created_at": datetime(2024, 1, 1, 9, 0),
}


def test_get_by_employee_id_maps_row():
    repo = MySQLEmployeeRepository(FakeConnFactory({"rows": [EMP_ROW]}))

    emp = repo.get_by_employee_id("EMP001")

    assert emp.id == 7
    assert emp.to_dict()["createdAt"] == "2024-01-01T09:00:00"


def test_list_all_orders_newest_first():
    factory = FakeConnFactory({"rows": [EMP_ROW]})

    MySQLEmployeeRepository(factory).list_all()

    sql, _ = factory.connections[0].executed[0]
    assert sql.endswith("ORDER BY created_at DESC, id DESC")


@pytest.mark.parametrize(
    "key, message",
    [
        ("uq_employees_employee_id", "Employee ID already exists"),
        ("uq_employees_email", "Email already exists"),
    ],
)
def test_create_translates_duplicate_key(key, message):
    factory = FakeConnFactory({"raise": _dup(key)})
    repo = MySQLEmployeeRepository(factory)

    with pytest.raises(ConflictError, match=message):
        repo.create(employee_id="EMP001", full_name="A", email="a@co.com", department="Eng", created_at=datetime(2024, 1, 1))

    assert factory.connections[0].rolled_back


def test_create_propagates_other_errors():
    factory = FakeConnFactory({"raise": mysql_errors.OperationalError(msg="gone away", errno=2006)})

    with pytest.raises(mysql_errors.OperationalError):
        MySQLEmployeeRepository(factory).create(
            employee_id="EMP001", full_name="A", email="a@co.com", department="Eng", created_at=datetime(2024, 1, 1)
        )


def test_delete_with_attendance_runs_both_deletes_in_one_transaction():
    factory = FakeConnFactory({"rowcount": 3}, {"rowcount": 1})

    assert MySQLEmployeeRepository(factory).delete_with_attendance(id=7, employee_id="EMP001") is True

    assert len(factory.connections) == 1
    conn = factory.connections[0]
    assert [sql for sql, _ in conn.executed] == [
        "DELETE FROM attendance_records WHERE employee_id=%s",
        "DELETE FROM employees WHERE id=%s",
    ]
    assert conn.committed and conn.closed


def test_delete_with_attendance_rolls_back_when_employee_delete_fails():
    factory = FakeConnFactory({"rowcount": 2}, {"raise": mysql_errors.OperationalError(msg="lock wait timeout", errno=1205)})

    with pytest.raises(mysql_errors.OperationalError):
        MySQLEmployeeRepository(factory).delete_with_attendance(id=7, employee_id="EMP001")

    conn = factory.connections[0]
    assert conn.rolled_back and not conn.committed


def test_attendance_create_translates_duplicate_and_missing_employee():
    repo = MySQLAttendanceRepository(
        FakeConnFactory(
            {"raise": mysql_errors.IntegrityError(msg="Duplicate entry for key 'attendance_records.uq_attendance_employee_date'", errno=1062)},
            {"raise": mysql_errors.IntegrityError(msg="Cannot add or update a child row", errno=1452)},
        )
    )
    kwargs = dict(employee_id="EMP001", work_date=date(2024, 1, 10), status=AttendanceStatus.PRESENT, created_at=datetime(2024, 1, 10))

    with pytest.raises(ConflictError, match="Attendance already marked for this date"):
        repo.create(**kwargs)
    with pytest.raises(NotFoundError, match="Employee not found"):
        repo.create(**kwargs)


def test_attendance_list_filter_and_count_by_status():
    row = {"id": 1, "employee_id": "EMP001", "work_date": date(2024, 1, 10), "status": "Absent", "created_at": datetime(2024, 1, 10)}
    factory = FakeConnFactory({"rows": [row]}, {"rows": [{"status": "Present", "total": 4}]})
    repo = MySQLAttendanceRepository(factory)

    records = repo.list_records(employee_id="EMP001")
    counts = repo.count_by_status(employee_id="EMP001")

    assert records[0].status == AttendanceStatus.ABSENT
    sql, params = factory.connections[0].executed[0]
    assert "WHERE employee_id=%s ORDER BY work_date DESC, id DESC" in sql
    assert params == ("EMP001",)
    assert counts == {AttendanceStatus.PRESENT: 4, AttendanceStatus.ABSENT: 0}


def test_sql_splitter_keeps_semicolons_inside_quotes():
    sql = "INSERT INTO t VALUES ('a;b'); SELECT 1;"

    assert list(iter_sql_statements(sql)) == ["INSERT INTO t VALUES ('a;b')", "SELECT 1"]


def test_schema_compares_business_keys_byte_for_byte():
    schema = (Path(__file__).resolve().parents[2] / "database" / "schema.sql").read_text(encoding="utf-8")

    assert schema.count("employee_id VARCHAR(64) COLLATE utf8mb4_bin NOT NULL") == 2
    assert "email VARCHAR(255) COLLATE utf8mb4_bin NOT NULL" in schema
