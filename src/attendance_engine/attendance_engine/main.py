from __future__ import annotations

import importlib
import logging
from zoneinfo import ZoneInfo

from dotenv import load_dotenv
from flask import Flask

from config import get_settings_module

from .attendance.controller import register as register_attendance
from .common.datetime_utils import parse_iso_date
from .container import build_container
from .database.bootstrap import SCHEMA_PATH, apply_schema, list_tables
from .reconciliation.scheduler import start_scheduler
from .reports.controller import register as register_reports

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

logger = logging.getLogger(__name__)


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(level=getattr(logging, str(level).upper(), logging.INFO), format=LOG_FORMAT)


def create_app() -> Flask:
    load_dotenv(override=False)
    app = Flask(__name__)

    settings_module = get_settings_module()
    settings = importlib.import_module(settings_module)
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    app.secret_key = getattr(settings, "SECRET_KEY")
    db_config = getattr(settings, "DB_CONFIG")
    app.config["DEBUG"] = bool(getattr(settings, "DEBUG", False))

    logger.info(
        "settings=%s db=%s@%s:%s/%s",
        settings_module,
        db_config.get("user"),
        db_config.get("host"),
        db_config.get("port", 3306),
        db_config.get("database"),
    )

    if bool(getattr(settings, "AUTO_INIT_DB", False)):
        apply_schema(db_config, schema_path=SCHEMA_PATH)
        logger.info("Schema ready (tables=%d)", len(list_tables(db_config)))

    tz_name = getattr(settings, "TIMEZONE", "")
    container = build_container(
        db_config=db_config,
        tz=ZoneInfo(tz_name) if tz_name else None,
        lookback_days=int(getattr(settings, "RECONCILE_LOOKBACK_DAYS", 1)),
        skip_weekends=bool(getattr(settings, "RECONCILE_SKIP_WEEKENDS", False)),
        working_days_mode=getattr(settings, "WORKING_DAYS_MODE", "fixed"),
        holidays=[parse_iso_date(d) for d in getattr(settings, "HOLIDAYS", [])],
    )
    app.extensions["attendance_container"] = container

    register_attendance(app, container)
    register_reports(app, container)

    if bool(getattr(settings, "RECONCILE_SWEEP_ENABLED", False)):
        scheduler = start_scheduler(
            container.sweep,
            interval_minutes=int(getattr(settings, "RECONCILE_INTERVAL_MINUTES", 1)),
        )
        app.extensions["reconciliation_scheduler"] = scheduler

    return app
