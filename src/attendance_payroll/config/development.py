import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_payroll"),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# Civil timezone for shift windows, "today" and salary normalisation.
TIMEZONE = os.getenv("TIMEZONE", "Asia/Jakarta")
BASE_SALARY = int(os.getenv("BASE_SALARY", "80000"))
EXPECTED_HOURS = float(os.getenv("EXPECTED_HOURS", "6"))

ADMIN_TOKEN = os.getenv("ADMIN_TOKEN", "dev-admin-token")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))
# Optional: also seed demo data on startup
AUTO_SEED_DB = bool(int(os.getenv("AUTO_SEED_DB", "0")))
