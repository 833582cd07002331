"""Last-checked factor with clock rollback detection.

Stores the time of the last trial check in a settings store and optionally
triggers a backup after updating it. If the stored time lies in the future,
the clock is assumed to have been set back to extend the trial and the
factor reports TRIAL_INVALID. Setting the clock back for any other reason
(or by accident) invalidates the trial just the same.

The stored value is lost when the host's settings are cleared, unless the
backup trigger replicated it somewhere that is restored on reinstall.

Known edge case: after tampering is detected, persist writes TRIAL_INVALID.
The next read decodes that literal, finds now >= TRIAL_INVALID and reports
NOT_AVAILABLE, so the invalidation lasts for one check only.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from pydantic import BaseModel, ConfigDict, Field

from trial_guard.core.domain.errors import (
    FactorPersistError,
    FactorReadError,
    SettingsStoreError,
    TimestampDecodeError,
)
from trial_guard.core.domain.timestamps import (
    NOT_AVAILABLE,
    NOT_AVAILABLE_TEXT,
    TRIAL_INVALID,
    decode_timestamp,
    describe,
    encode_timestamp,
)
from trial_guard.core.factors.base import TrialFactor

if TYPE_CHECKING:
    from trial_guard.core.ports.environment import TrialEnvironment

LOGGER = logging.getLogger(__name__)

DEFAULT_PREFERENCE_FILE = "simple_trial"
DEFAULT_PREFERENCE_NAME = "last_check"

# Settings namespaces double as file names (one file per namespace).
PREFERENCE_FILE_PATTERN = r"^[A-Za-z0-9_-][A-Za-z0-9_.-]*$"

_NOT_AVAILABLE_ENCODED = encode_timestamp(NOT_AVAILABLE)


class LastCheckedConfig(BaseModel):
    """Configuration for LastCheckedTrialFactor.

    With the defaults, the timestamp is stored in settings namespace
    "simple_trial" under key "last_check", and a backup is triggered after
    every write.
    """

    preference_file: str = Field(
        default=DEFAULT_PREFERENCE_FILE,
        min_length=1,
        pattern=PREFERENCE_FILE_PATTERN,
    )
    preference_name: str = Field(default=DEFAULT_PREFERENCE_NAME, min_length=1)
    should_trigger_backup: bool = True

    model_config = ConfigDict(extra="forbid", frozen=True)


class LastCheckedTrialFactor(TrialFactor):
    """Remembers the last check time and infers backward clock moves.

    When healthy this factor never offers the stored value as a trial start
    candidate. It only ever reports NOT_AVAILABLE or TRIAL_INVALID.
    """

    def __init__(self, config: LastCheckedConfig | None = None) -> None:
        self._config = config if config is not None else LastCheckedConfig()

    @property
    def config(self) -> LastCheckedConfig:
        return self._config

    def read_timestamp(self, env: TrialEnvironment) -> int:
        try:
            raw = env.settings.get(
                self._config.preference_file,
                self._config.preference_name,
                NOT_AVAILABLE_TEXT,
            )
        except SettingsStoreError as exc:
            raise FactorReadError(self.name, f"settings store read failed: {exc}") from exc

        if raw in (NOT_AVAILABLE_TEXT, _NOT_AVAILABLE_ENCODED):
            return NOT_AVAILABLE

        try:
            last_check_ms = decode_timestamp(raw)
        except TimestampDecodeError as exc:
            raise FactorReadError(self.name, str(exc)) from exc

        now_ms = env.now_ms()
        if now_ms < last_check_ms:
            # Assume intentional clock tampering and invalidate the trial.
            LOGGER.warning(
                "Clock is behind last recorded check",
                extra={"factor": self.name, "now_ms": now_ms, "last_check_ms": last_check_ms},
            )
            return TRIAL_INVALID
        return NOT_AVAILABLE

    def persist_timestamp(self, timestamp: int, env: TrialEnvironment) -> None:
        """Record the current check.

        The supplied timestamp is not used. If read_timestamp reports no
        tampering the current time is stored, otherwise TRIAL_INVALID.
        A failing re-read is a persist failure: the resolution already has
        this factor's reading.
        """
        try:
            is_trial_valid = self.read_timestamp(env) == NOT_AVAILABLE
        except FactorReadError as exc:
            raise FactorPersistError(self.name, f"re-read before write failed: {exc}") from exc
        value = env.now_ms() if is_trial_valid else TRIAL_INVALID

        try:
            env.settings.put(
                self._config.preference_file,
                self._config.preference_name,
                encode_timestamp(value),
            )
        except SettingsStoreError as exc:
            raise FactorPersistError(self.name, f"settings store write failed: {exc}") from exc

        LOGGER.debug(
            "Last check persisted",
            extra={"factor": self.name, "value": describe(value)},
        )

        if self._config.should_trigger_backup:
            self._trigger_backup(env)

    def _trigger_backup(self, env: TrialEnvironment) -> None:
        try:
            env.backup_trigger()
        except Exception:  # pylint: disable=broad-exception-caught
            LOGGER.warning(
                "Backup trigger failed; continuing",
                extra={"factor": self.name},
                exc_info=True,
            )

    def __repr__(self) -> str:
        return (
            f"{self.name}(preference_file={self._config.preference_file!r}, "
            f"preference_name={self._config.preference_name!r})"
        )
