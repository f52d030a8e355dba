from __future__ import annotations

from flask import Flask, request

from ..common.responses import domain_error, json_body, ok, unexpected_error
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container, *, prefix: str = "") -> None:
    @app.route(f"{prefix}/attendance", methods=["GET"], endpoint="list_attendance")
    def list_attendance():
        try:
            records = container.attendance_service.list_records(request.args.get("employeeId"))
            return ok([r.to_dict() for r in records])
        except Exception as e:
            app.logger.exception("Error fetching attendance records")
            return unexpected_error("Error fetching attendance records", e)

    @app.route(f"{prefix}/attendance", methods=["POST"], endpoint="mark_attendance")
    def mark_attendance():
        try:
            record = container.attendance_service.mark(json_body())
            app.logger.info("Marked %s %s as %s", record.employee_id, record.work_date, record.status.value)
            return ok(record.to_dict(), message="Attendance marked successfully", status=201)
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            app.logger.exception("Error marking attendance")
            return unexpected_error("Error marking attendance", e)

    @app.route(f"{prefix}/attendance/summary/<employee_id>", methods=["GET"], endpoint="attendance_summary")
    def attendance_summary(employee_id: str):
        try:
            summary = container.attendance_service.summary(employee_id)
            return ok(summary.to_dict())
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            app.logger.exception("Error fetching attendance summary for %s", employee_id)
            return unexpected_error("Error fetching attendance summary", e)
