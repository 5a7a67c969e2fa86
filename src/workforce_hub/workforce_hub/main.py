from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask, jsonify

from config import get_settings_module

from .activities.controller import register as register_activities
from .common.logging_setup import setup_logging
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_admin_user, list_tables
from .fives.controller import register as register_fives
from .health.controller import register as register_health
from .masterdata.controller import register as register_masterdata
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[3] / "database"


def create_app(container: Optional[Container] = None) -> Flask:
    """Application factory.

    A prebuilt container (e.g. in-memory repositories in tests) skips all
    database setup.
    """

    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))

    setup_logging(
        level=str(getattr(settings, "LOG_LEVEL", "INFO")),
        json_output=bool(getattr(settings, "LOG_JSON", False)),
    )
    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if container is None:
        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%s)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_admin_user(db_config)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            upcoming_days=int(getattr(settings, "UPCOMING_WINDOW_DAYS", 7)),
            health_dashboard_days=int(getattr(settings, "HEALTH_DASHBOARD_DAYS", 7)),
            at_risk_min_score=int(getattr(settings, "AT_RISK_MIN_SCORE", 20)),
            at_risk_limit=int(getattr(settings, "AT_RISK_LIMIT", 10)),
        )

    app.extensions["workforce_hub"] = container

    register_users(app, container)
    register_masterdata(app, container)
    register_activities(app, container)
    register_health(app, container)
    register_fives(app, container)

    @app.errorhandler(404)
    def not_found(_e):
        return jsonify({"success": False, "message": "Not found"}), 404

    @app.errorhandler(405)
    def method_not_allowed(_e):
        return jsonify({"success": False, "message": "Method not allowed"}), 405

    return app
