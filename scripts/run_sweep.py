"""Run absence reconciliation once, e.g. from cron.

Usage: python scripts/run_sweep.py [YYYY-MM-DD]

Without a date the regular sweep runs (today plus the lookback window); with a
date only that day is reconciled and errors are reported.
"""

from __future__ import annotations

import importlib
import logging
import sys
from pathlib import Path
from zoneinfo import ZoneInfo

REPO_ROOT = Path(__file__).resolve().parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from dotenv import load_dotenv

from config import get_settings_module

from src.attendance_engine.attendance_engine.common.datetime_utils import parse_iso_date
from src.attendance_engine.attendance_engine.container import build_container
from src.attendance_engine.attendance_engine.core.exceptions import DomainError
from src.attendance_engine.attendance_engine.main import configure_logging

logger = logging.getLogger("run_sweep")


def main(argv: list[str]) -> int:
    load_dotenv(override=False)
    settings = importlib.import_module(get_settings_module())
    configure_logging(getattr(settings, "LOG_LEVEL", "INFO"))

    tz_name = getattr(settings, "TIMEZONE", "")
    container = build_container(
        db_config=dict(settings.DB_CONFIG),
        tz=ZoneInfo(tz_name) if tz_name else None,
        lookback_days=int(getattr(settings, "RECONCILE_LOOKBACK_DAYS", 1)),
        skip_weekends=bool(getattr(settings, "RECONCILE_SKIP_WEEKENDS", False)),
    )

    if not argv:
        inserted = container.sweep.run_once()
        print(f"OK: sweep inserted {inserted} absence(s)")
        return 0

    target_date = parse_iso_date(argv[0])
    try:
        records = container.sweep.reconcile_now(target_date)
    except DomainError as exc:
        logger.error("Reconciliation of %s failed: %s", target_date, exc)
        return 1
    print(f"OK: {target_date} -> {len(records)} absence(s) inserted")
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv[1:]))
