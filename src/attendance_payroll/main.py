from __future__ import annotations

import importlib
import logging
from typing import Optional

from dotenv import load_dotenv
from flask import Flask

from .attendance.controller import register as register_attendance
from .config import get_settings_module
from .container import Container, build_container
from .database.bootstrap import apply_schema, apply_seed_sql, list_tables
from .employees.controller import register as register_employees
from .payroll.controller import register as register_reports
from .shifts.controller import register as register_shifts

logger = logging.getLogger(__name__)


def create_app(container: Optional[Container] = None, *, settings_module: Optional[str] = None) -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = settings_module or get_settings_module()
    settings = importlib.import_module(settings_module)

    logging.basicConfig(
        level=getattr(settings, "LOG_LEVEL", "INFO"),
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
    )

    app.secret_key = getattr(settings, "SECRET_KEY")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))
    app.config["TESTING"] = bool(getattr(settings, "TESTING", False))
    app.config["ADMIN_TOKEN"] = getattr(settings, "ADMIN_TOKEN", "")
    db_config = getattr(settings, "DB_CONFIG")

    if container is None:
        container = build_container(
            db_config=db_config,
            timezone_name=getattr(settings, "TIMEZONE"),
            base_salary=int(getattr(settings, "BASE_SALARY")),
            expected_hours=float(getattr(settings, "EXPECTED_HOURS")),
        )
        logger.info("settings=%s db=%s", settings_module, container.conn.config.describe())

        if bool(getattr(settings, "AUTO_INIT_DB", False)):
            apply_schema(container.conn)
            logger.info("schema ready (tables=%d)", len(list_tables(container.conn)))
        if bool(getattr(settings, "AUTO_SEED_DB", False)):
            apply_seed_sql(container.conn)
            logger.info("demo seed ready")

    register_attendance(app, container)
    register_shifts(app, container)
    register_employees(app, container)
    register_reports(app, container)

    return app
