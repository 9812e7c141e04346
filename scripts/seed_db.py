"""Load the demo shifts and employee from seed.sql."""

from __future__ import annotations

import importlib
import logging

from dotenv import load_dotenv

from attendance_payroll.config import get_settings_module
from attendance_payroll.database.bootstrap import apply_seed_sql
from attendance_payroll.database.connection import DBConfig, DatabaseConnection

logger = logging.getLogger("seed_db")


def main() -> None:
    load_dotenv(override=False)
    logging.basicConfig(level=logging.INFO, format="%(levelname)s %(message)s")
    settings = importlib.import_module(get_settings_module())

    conn = DatabaseConnection(DBConfig.from_dict(settings.DB_CONFIG))
    apply_seed_sql(conn)
    logger.info("OK: demo data loaded into %s", conn.config.describe())


if __name__ == "__main__":
    main()
