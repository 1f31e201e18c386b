import os

SECRET_KEY = os.getenv("SECRET_KEY", "dev-secret-key")

DB_CONFIG = {
    "host": os.getenv("DB_HOST", "localhost"),
    "port": int(os.getenv("DB_PORT", "3306")),
    "user": os.getenv("DB_USER", "root"),
    "password": os.getenv("DB_PASSWORD", ""),
    "database": os.getenv("DB_NAME", "attendance_db"),
    "connection_timeout": int(os.getenv("DB_CONNECT_TIMEOUT", "10")),
}

DEBUG = True
LOG_LEVEL = os.getenv("LOG_LEVEL", "DEBUG")

# If enabled, app will apply schema.sql on startup (idempotent: CREATE IF NOT EXISTS)
AUTO_INIT_DB = bool(int(os.getenv("AUTO_INIT_DB", "1")))

# IANA zone name, empty means server local time
TIMEZONE = os.getenv("TIMEZONE", "")

RECONCILE_SWEEP_ENABLED = bool(int(os.getenv("RECONCILE_SWEEP_ENABLED", "1")))
RECONCILE_INTERVAL_MINUTES = int(os.getenv("RECONCILE_INTERVAL_MINUTES", "1"))
RECONCILE_LOOKBACK_DAYS = int(os.getenv("RECONCILE_LOOKBACK_DAYS", "1"))
RECONCILE_SKIP_WEEKENDS = bool(int(os.getenv("RECONCILE_SKIP_WEEKENDS", "0")))

# fixed: 22 working days per month, calendar: weekdays minus HOLIDAYS
WORKING_DAYS_MODE = os.getenv("WORKING_DAYS_MODE", "fixed")
HOLIDAYS = [d.strip() for d in os.getenv("HOLIDAYS", "").split(",") if d.strip()]
