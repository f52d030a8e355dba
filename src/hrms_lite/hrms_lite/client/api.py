"""Thin HTTP client for the HRMS Lite API.

Issues exactly the requests the web frontend does and hands back the JSON
envelope (``{success, data, message, error}``) untouched.
"""

from __future__ import annotations

from typing import Any, Optional

import requests

from ..core.constants import DEFAULT_CLIENT_TIMEOUT_SECONDS


def _quote(segment: Any) -> str:
    return requests.utils.quote(str(segment), safe="")


class APIError(Exception):
    """Non-2xx response; ``envelope`` holds the server's error body."""

    def __init__(self, status_code: int, envelope: dict):
        self.status_code = status_code
        self.envelope = envelope
        super().__init__(envelope.get("message") or f"HTTP {status_code}")


class HRMSClient:
    def __init__(
        self,
        base_url: str = "http://localhost:5000/api",
        *,
        session: Optional[requests.Session] = None,
        timeout: float = DEFAULT_CLIENT_TIMEOUT_SECONDS,
    ):
        self._base_url = base_url.rstrip("/")
        self._session = session or requests.Session()
        self._session.headers.update({"Content-Type": "application/json"})
        self._timeout = timeout

    def _request(self, method: str, path: str, **kwargs: Any) -> dict:
        resp = self._session.request(method, f"{self._base_url}{path}", timeout=self._timeout, **kwargs)
        try:
            envelope = resp.json()
        except ValueError:
            envelope = {"success": False, "message": resp.text or resp.reason}
        if not 200 <= resp.status_code < 300:
            raise APIError(resp.status_code, envelope)
        return envelope

    # Employees
    def list_employees(self) -> dict:
        return self._request("GET", "/employees")

    def get_employee(self, id: int | str) -> dict:
        return self._request("GET", f"/employees/{_quote(id)}")

    def create_employee(self, *, employee_id: str, full_name: str, email: str, department: str) -> dict:
        return self._request(
            "POST",
            "/employees",
            json={"employeeId": employee_id, "fullName": full_name, "email": email, "department": department},
        )

    def delete_employee(self, id: int | str) -> dict:
        return self._request("DELETE", f"/employees/{_quote(id)}")

    # Attendance
    def list_attendance(self, employee_id: Optional[str] = None) -> dict:
        params = {"employeeId": employee_id} if employee_id else {}
        return self._request("GET", "/attendance", params=params)

    def mark_attendance(self, *, employee_id: str, date: str, status: str) -> dict:
        return self._request("POST", "/attendance", json={"employeeId": employee_id, "date": date, "status": status})

    def attendance_summary(self, employee_id: str) -> dict:
        return self._request("GET", f"/attendance/summary/{_quote(employee_id)}")

    # Dashboard
    def dashboard_stats(self) -> dict:
        return self._request("GET", "/dashboard/stats")
