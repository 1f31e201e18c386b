from __future__ import annotations

import logging
from datetime import date, datetime, timedelta
from typing import Callable, Optional

from apscheduler.schedulers.background import BackgroundScheduler

from ..attendance.model import AttendanceRecord
from ..common.datetime_utils import is_weekend, now_local
from ..core.constants import DEFAULT_SWEEP_INTERVAL_MINUTES, DEFAULT_SWEEP_LOOKBACK_DAYS
from ..core.exceptions import DomainError
from ..policy.service import PolicyService
from .reconciler import AbsenceReconciler

logger = logging.getLogger(__name__)


class ReconciliationSweep:
    """Periodic trigger for the reconciler.

    Each tick evaluates today and the previous ``lookback_days`` days against
    the currently active policy. Failures are logged and the tick is dropped;
    the next tick retries.
    """

    def __init__(
        self,
        reconciler: AbsenceReconciler,
        policies: PolicyService,
        *,
        lookback_days: int = DEFAULT_SWEEP_LOOKBACK_DAYS,
        skip_weekends: bool = False,
        clock: Callable[[], datetime] = now_local,
    ):
        self._reconciler = reconciler
        self._policies = policies
        self._lookback_days = max(int(lookback_days), 0)
        self._skip_weekends = skip_weekends
        self._clock = clock

    def target_dates(self, today: date) -> list[date]:
        days = [today - timedelta(days=offset) for offset in range(self._lookback_days, -1, -1)]
        if self._skip_weekends:
            days = [d for d in days if not is_weekend(d)]
        return days

    def run_once(self, now: Optional[datetime] = None) -> int:
        """One sweep tick; returns how many absences were inserted."""
        now = now or self._clock()
        try:
            policy = self._policies.current()
        except DomainError as exc:
            logger.warning("Reconciliation tick skipped: %s", exc)
            return 0

        total = 0
        for day in self.target_dates(self._reconciler.local_now(now).date()):
            try:
                total += len(self._reconciler.reconcile(day, policy, now))
            except DomainError as exc:
                logger.warning("Reconciliation of %s aborted, retrying next tick: %s", day, exc)
                break
            except Exception:
                logger.exception("Reconciliation of %s failed, retrying next tick", day)
                break
        return total

    def reconcile_now(self, target_date: date, now: Optional[datetime] = None) -> list[AttendanceRecord]:
        """Explicit "reconcile this date now" command; errors reach the caller."""
        now = now or self._clock()
        return self._reconciler.reconcile(target_date, self._policies.current(), now)


def start_scheduler(
    sweep: ReconciliationSweep,
    *,
    interval_minutes: int = DEFAULT_SWEEP_INTERVAL_MINUTES,
) -> BackgroundScheduler:
    scheduler = BackgroundScheduler()
    scheduler.add_job(
        sweep.run_once,
        "interval",
        minutes=interval_minutes,
        id="absence-reconciliation",
        max_instances=1,
        coalesce=True,
        next_run_time=datetime.now(),
    )
    scheduler.start()
    logger.info("Absence reconciliation sweep scheduled every %s minute(s)", interval_minutes)
    return scheduler
