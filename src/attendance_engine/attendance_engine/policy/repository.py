from __future__ import annotations

from typing import Optional, Protocol

from .model import WorkHoursPolicy


class PolicyRepository(Protocol):
    """External configuration store for the work-hours policy."""

    def get_policy(self) -> Optional[WorkHoursPolicy]:
        """Return the active policy, or None when no setting was ever saved."""

        raise NotImplementedError

    def set_policy(self, policy: WorkHoursPolicy) -> WorkHoursPolicy:
        """Persist the policy and return it stamped with its new ``updated_at``."""

        raise NotImplementedError
