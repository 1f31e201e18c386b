import os

SECRET_KEY = os.getenv("SECRET_KEY", "please-set-SECRET_KEY")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
    "connection_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

DEBUG = False
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "0")))

TIMEZONE = os.getenv("TIMEZONE", "")

RECONCILE_SWEEP_ENABLED = bool(int(os.getenv("RECONCILE_SWEEP_ENABLED", "1")))
RECONCILE_INTERVAL_MINUTES = int(os.getenv("RECONCILE_INTERVAL_MINUTES", "1"))
RECONCILE_LOOKBACK_DAYS = int(os.getenv("RECONCILE_LOOKBACK_DAYS", "1"))
RECONCILE_SKIP_WEEKENDS = bool(int(os.getenv("RECONCILE_SKIP_WEEKENDS", "0")))

WORKING_DAYS_MODE = os.getenv("WORKING_DAYS_MODE", "fixed")
HOLIDAYS = [d.strip() for d in os.getenv("HOLIDAYS", "").split(",") if d.strip()]
