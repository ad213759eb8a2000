from __future__ import annotations

import importlib
import logging
from pathlib import Path
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .api.errors import register as register_errors
from .attendance.controller import register as register_attendance
from .common.log import configure_logging
from .container import Container, build_container
from .core.constants import DEFAULT_DASHBOARD_QUERY_TIMEOUT, DEFAULT_DASHBOARD_WORKERS
from .dashboard.controller import register as register_dashboard
from .database.bootstrap import apply_schema, apply_seed_sql, ensure_demo_users, list_tables
from .leaves.controller import register as register_leaves
from .users.controller import register as register_users

logger = logging.getLogger(__name__)

DATABASE_DIR = Path(__file__).resolve().parents[2] / "database"


def create_app(*, settings_module: Optional[str] = None, container: Optional[Container] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.json.sort_keys = False

    if container is None:
        db_config = getattr(settings, "DB_CONFIG")
        logger.info(
            "settings=%s db=%s@%s:%s/%s",
            settings_module,
            db_config.get("user"),
            db_config.get("host"),
            db_config.get("port", 3306),
            db_config.get("database"),
        )

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(db_config, schema_path=DATABASE_DIR / "schema.sql")
            logger.info("schema ready (tables=%d)", len(list_tables(db_config)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(db_config, seed_path=DATABASE_DIR / "seed.sql")
            ensure_demo_users(db_config)
            logger.info("demo seed ready")

        container = build_container(
            db_config=db_config,
            jwt_secret=getattr(settings, "JWT_SECRET"),
            jwt_algorithm=getattr(settings, "JWT_ALGORITHM", "HS256"),
            jwt_expires_minutes=int(getattr(settings, "JWT_EXPIRES_MINUTES", 480)),
            dashboard_workers=int(getattr(settings, "DASHBOARD_WORKERS", DEFAULT_DASHBOARD_WORKERS)),
            dashboard_timeout=float(getattr(settings, "DASHBOARD_QUERY_TIMEOUT", DEFAULT_DASHBOARD_QUERY_TIMEOUT)),
        )

    app.extensions["punchclock"] = container

    register_errors(app)
    register_users(app, container)
    register_attendance(app, container)
    register_leaves(app, container)
    register_dashboard(app, container)

    return app


if __name__ == "__main__":
    create_app().run(port=3000)
