from __future__ import annotations

from flask import Flask

from ..common.responses import ok, unexpected_error
from ..container import Container


def register(app: Flask, container: Container, *, prefix: str = "") -> None:
    @app.route(f"{prefix}/dashboard/stats", methods=["GET"], endpoint="dashboard_stats")
    def dashboard_stats():
        try:
            return ok(container.dashboard_service.stats().to_dict())
        except Exception as e:
            app.logger.exception("Error fetching dashboard data")
            return unexpected_error("Error fetching dashboard data", e)

    @app.route(f"{prefix}/health", methods=["GET"], endpoint="health")
    def health():
        return ok(message="OK")
