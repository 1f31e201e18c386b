from __future__ import annotations

import json
from datetime import datetime
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..core.constants import POLICY_SETTING_KEY
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchone
from .model import WorkHoursPolicy
from .repository import PolicyRepository


class MySQLPolicyRepository(PolicyRepository):
    def __init__(self, conn_factory: DatabaseConnection, *, clock: Callable[[], datetime] = now_local):
        self._conn_factory = conn_factory
        self._clock = clock

    def get_policy(self) -> Optional[WorkHoursPolicy]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT setting_value, updated_at
                FROM system_settings
                WHERE setting_key=%s AND is_enabled=1
                """,
                (POLICY_SETTING_KEY,),
            )
            r = fetchone(cur)
            if not r:
                return None
            value = r["setting_value"]
            if isinstance(value, (bytes, bytearray)):
                value = value.decode("utf-8")
            if isinstance(value, str):
                value = json.loads(value)
            return WorkHoursPolicy.from_setting(value, updated_at=r.get("updated_at"))

    def set_policy(self, policy: WorkHoursPolicy) -> WorkHoursPolicy:
        updated_at = self._clock().replace(microsecond=0)
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                INSERT INTO system_settings(setting_key, setting_value, description, is_enabled, updated_at)
                VALUES(%s,%s,%s,1,%s)
                ON DUPLICATE KEY UPDATE
                    setting_value=VALUES(setting_value),
                    is_enabled=1,
                    updated_at=VALUES(updated_at)
                """,
                (
                    POLICY_SETTING_KEY,
                    json.dumps(policy.to_setting()),
                    "Standard working hours configuration",
                    updated_at,
                ),
            )
        return WorkHoursPolicy.from_setting(policy.to_setting(), updated_at=updated_at)
