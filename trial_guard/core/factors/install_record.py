"""Install-record factor.

Cannot persist. Returns the first install time kept outside the
application; that record survives updates but is reset by a reinstall.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from trial_guard.core.domain.errors import InstallRecordNotFoundError
from trial_guard.core.domain.timestamps import NOT_AVAILABLE, TRIAL_INVALID
from trial_guard.core.factors.base import TrialFactor

if TYPE_CHECKING:
    from trial_guard.core.ports.environment import TrialEnvironment

LOGGER = logging.getLogger(__name__)


class InstallRecordTrialFactor(TrialFactor):
    """Reads env.install_records for env.app_id."""

    def read_timestamp(self, env: TrialEnvironment) -> int:
        try:
            first_install_ms = env.install_records.first_install_time_ms(env.app_id)
        except InstallRecordNotFoundError:
            # Should never happen for an installed application.
            LOGGER.warning(
                "Install record not found",
                extra={"factor": self.name, "app_id": env.app_id},
            )
            return NOT_AVAILABLE

        if first_install_ms > env.now_ms():
            return TRIAL_INVALID
        return first_install_ms
