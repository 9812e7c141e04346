"""Create the database (if missing) and apply schema.sql."""

from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from attendance_payroll.config import get_settings_module
from attendance_payroll.database.bootstrap import apply_schema, list_tables
from attendance_payroll.database.connection import DBConfig, DatabaseConnection

logger = logging.getLogger("init_db")


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())

    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))
    apply_schema(conn)
    logger.info("OK: schema ready on %s (tables=%s)", conn.config.describe(), ", ".join(list_tables(conn)))


if __name__ == "__main__":
    main()
