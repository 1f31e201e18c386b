import os

SECRET_KEY = "test-secret"

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_test_db"),
    "connection_timeout": 5,
}

DEBUG = False
TESTING = True
LOG_LEVEL = "WARNING"

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

TIMEZONE = ""

RECONCILE_SWEEP_ENABLED = False
RECONCILE_INTERVAL_MINUTES = 1
RECONCILE_LOOKBACK_DAYS = 1
RECONCILE_SKIP_WEEKENDS = False

WORKING_DAYS_MODE = "fixed"
HOLIDAYS: list[str] = []
