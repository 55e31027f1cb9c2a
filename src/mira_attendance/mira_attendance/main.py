from __future__ import annotations

import importlib
import logging
from datetime import timedelta
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify
from werkzeug.exceptions import HTTPException

from config import get_settings_module

from .academics.controller import register as register_academics
from .ai.controller import register as register_ai
from .applications.controller import register as register_applications
from .attendance.controller import register as register_attendance
from .container import Container, build_container
from .core.constants import DEFAULT_SESSION_DAYS
from .core.exceptions import DomainError
from .core.logging_config import configure_logging
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .feedback.controller import register as register_feedback
from .notifications.controller import register as register_notifications
from .reports.controller import register as register_reports
from .settings.controller import register as register_settings
from .timetables.controller import register as register_timetables
from .todos.controller import register as register_todos
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def _register_error_handlers(app: Flask) -> None:
    @app.errorhandler(DomainError)
    def handle_domain_error(e: DomainError):
        return jsonify({"message": str(e)}), e.status_code

    @app.errorhandler(HTTPException)
    def handle_http_error(e: HTTPException):
        return jsonify({"message": e.description}), e.code

    @app.errorhandler(Exception)
    def handle_unexpected_error(e: Exception):
        logger.exception("Unhandled error: %s", e)
        return jsonify({"message": "Internal server error"}), 500


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    Passing a ready container skips database bootstrap and wiring (tests use
    this with in-memory repositories).
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["SESSION_DAYS"] = int(getattr(settings, "SESSION_DAYS", DEFAULT_SESSION_DAYS))
    app.permanent_session_lifetime = timedelta(days=app.config["SESSION_DAYS"])

    if container is None:
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if getattr(settings, "AUTO_INIT_DB", False):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if getattr(settings, "AUTO_SEED_DB", False):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_users(db_config)
            logger.info("demo seed ready")

        container = build_container(db_config=db_config, settings=settings)

    _register_error_handlers(app)

    register_users(app, container)
    register_attendance(app, container)
    register_applications(app, container)
    register_timetables(app, container)
    register_feedback(app, container)
    register_settings(app, container)
    register_todos(app, container)
    register_academics(app, container)
    register_reports(app, container)
    register_notifications(app, container)
    register_ai(app, container)

    return app
