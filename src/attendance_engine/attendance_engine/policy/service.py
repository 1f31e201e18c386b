from __future__ import annotations

import logging
from typing import Any, Optional

from ..core.exceptions import ConfigUnavailable
from .model import WorkHoursPolicy
from .repository import PolicyRepository

logger = logging.getLogger(__name__)


class PolicyService:
    """Read access to the active work-hours policy.

    Keeps the last policy that loaded successfully; when the store fails the
    cached one is served, and without a cache ``ConfigUnavailable`` is raised.
    A store that has no saved setting yields the defaults.
    """

    def __init__(self, policies: PolicyRepository):
        self._policies = policies
        self._last_known_good: Optional[WorkHoursPolicy] = None

    def current(self) -> WorkHoursPolicy:
        try:
            policy = self._policies.get_policy()
        except Exception as exc:
            if self._last_known_good is not None:
                logger.warning("Policy fetch failed, using last known good policy: %s", exc)
                return self._last_known_good
            raise ConfigUnavailable("work hours policy unavailable") from exc

        if policy is None:
            policy = WorkHoursPolicy()
        self._last_known_good = policy
        return policy

    def replace(self, payload: dict[str, Any]) -> WorkHoursPolicy:
        """Validate and store a new policy (admin configuration screen)."""
        policy = WorkHoursPolicy.from_setting(payload)
        saved = self._policies.set_policy(policy)
        self._last_known_good = saved
        logger.info("Work hours policy updated: %s", saved.to_setting())
        return saved
