from __future__ import annotations

import importlib
from pathlib import Path
from typing import Optional
from zoneinfo import ZoneInfo

from dotenv import load_dotenv
from flask import Flask, request
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.responses import fail
from .container import Container, build_container
from .core.constants import DEFAULT_API_PREFIX, DEFAULT_TIMEZONE
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .employees.controller import register as register_employees

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _register_cors(app: Flask, prefix: str) -> None:
    origins = app.config["CORS_ORIGINS"]

    @app.after_request
    def add_cors_headers(response):
        if request.path.startswith(prefix or "/"):
            response.headers["Access-Control-Allow-Origin"] = origins
            response.headers["Access-Control-Allow-Methods"] = "GET, POST, DELETE, OPTIONS"
            response.headers["Access-Control-Allow-Headers"] = "Content-Type"
        return response


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(HTTPException)
    def http_error(e: HTTPException):
        # 404 for unknown routes, 405 for wrong methods, 400 for unreadable bodies.
        return fail(e.description or e.name, status=e.code or 500, error=e.name)


def create_app(container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["API_PREFIX"] = getattr(settings, "API_PREFIX", DEFAULT_API_PREFIX).rstrip("/")
    app.config["TIMEZONE"] = getattr(settings, "TIMEZONE", DEFAULT_TIMEZONE)
    app.config["CORS_ORIGINS"] = getattr(settings, "CORS_ORIGINS", "*")
    app.json.sort_keys = False
    app.logger.setLevel(getattr(settings, "LOG_LEVEL", "INFO"))

    tz = ZoneInfo(app.config["TIMEZONE"])

    if container is None:
        app.logger.info(
            "settings=%s db=%s@%s:%s/%s tz=%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
            tz.key,
        )

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            app.logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            app.logger.info("demo seed ready")

        container = build_container(db_config=db_config, tz=tz)

    prefix = app.config["API_PREFIX"]
    register_employees(app, container, prefix=prefix)
    register_attendance(app, container, prefix=prefix)
    register_dashboard(app, container, prefix=prefix)
    _register_cors(app, prefix)
    _register_error_handlers(app)

    return app
