from __future__ import annotations

from flask import Flask

from ..common.responses import domain_error, json_body, ok, unexpected_error
from ..core.exceptions import DomainError
from ..container import Container


def register(app: Flask, container: Container, *, prefix: str = "") -> None:
    @app.route(f"{prefix}/employees", methods=["GET"], endpoint="list_employees")
    def list_employees():
        try:
            employees = container.employee_service.list_employees()
            return ok([e.to_dict() for e in employees])
        except Exception as e:
            app.logger.exception("Error fetching employees")
            return unexpected_error("Error fetching employees", e)

    @app.route(f"{prefix}/employees/<id>", methods=["GET"], endpoint="get_employee")
    def get_employee(id: str):
        try:
            employee = container.employee_service.get_employee(id)
            return ok(employee.to_dict())
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            app.logger.exception("Error fetching employee id=%s", id)
            return unexpected_error("Error fetching employee", e)

    @app.route(f"{prefix}/employees", methods=["POST"], endpoint="create_employee")
    def create_employee():
        try:
            employee = container.employee_service.create_employee(json_body())
            app.logger.info("Created employee %s (id=%s)", employee.employee_id, employee.id)
            return ok(employee.to_dict(), message="Employee created successfully", status=201)
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            app.logger.exception("Error creating employee")
            return unexpected_error("Error creating employee", e)

    @app.route(f"{prefix}/employees/<id>", methods=["DELETE"], endpoint="delete_employee")
    def delete_employee(id: str):
        try:
            employee = container.employee_service.delete_employee(id)
            app.logger.info("Deleted employee %s (id=%s) and its attendance", employee.employee_id, employee.id)
            return ok(message="Employee and associated attendance records deleted successfully")
        except DomainError as e:
            return domain_error(e)
        except Exception as e:
            app.logger.exception("Error deleting employee id=%s", id)
            return unexpected_error("Error deleting employee", e)
