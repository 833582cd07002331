"""Public API for the trial_guard package.

Only symbols imported here are considered part of the stable,
supported external interface.
"""

from __future__ import annotations

from importlib.metadata import PackageNotFoundError, version

# ----------------------------------------------------------------------
# Adapters
# ----------------------------------------------------------------------
from trial_guard.adapters.clock import FixedClock, SystemClock
from trial_guard.adapters.install_records import (
    PackageInstallRecordSource,
    StaticInstallRecordSource,
)
from trial_guard.adapters.settings import InMemorySettingsStore, JsonFileSettingsStore
from trial_guard.bootstrap import build_environment, build_resolver

# ----------------------------------------------------------------------
# Domain
# ----------------------------------------------------------------------
from trial_guard.core.domain.errors import (
    FactorPersistError,
    FactorReadError,
    InstallRecordNotFoundError,
    SettingsStoreError,
    TimestampDecodeError,
    TrialGuardError,
)
from trial_guard.core.domain.timestamps import (
    NOT_AVAILABLE,
    TRIAL_INVALID,
    decode_timestamp,
    encode_timestamp,
)
from trial_guard.core.domain.types import TrialDecision, TrialStats, compute_trial_stats

# ----------------------------------------------------------------------
# Events
# ----------------------------------------------------------------------
from trial_guard.core.events.event_bus import EventBus
from trial_guard.core.events.sinks.file_recorder import FileRecorderSink
from trial_guard.core.events.sinks.sink_logging import LoggingEventSink

# ----------------------------------------------------------------------
# Factors
# ----------------------------------------------------------------------
from trial_guard.core.factors.base import TrialFactor
from trial_guard.core.factors.install_record import InstallRecordTrialFactor
from trial_guard.core.factors.last_checked import LastCheckedConfig, LastCheckedTrialFactor

# ----------------------------------------------------------------------
# Resolver
# ----------------------------------------------------------------------
from trial_guard.core.ports.environment import TrialEnvironment
from trial_guard.core.resolver.trial_config import TrialConfig
from trial_guard.core.resolver.trial_resolver import TrialResolver

# ----------------------------------------------------------------------
# Public API definition
# ----------------------------------------------------------------------

__all__ = [
    # Sentinels + codec
    "NOT_AVAILABLE",
    "TRIAL_INVALID",
    "encode_timestamp",
    "decode_timestamp",

    # Results
    "TrialStats",
    "TrialDecision",
    "compute_trial_stats",

    # Factors
    "TrialFactor",
    "LastCheckedTrialFactor",
    "LastCheckedConfig",
    "InstallRecordTrialFactor",

    # Resolver
    "TrialConfig",
    "TrialResolver",
    "TrialEnvironment",
    "build_environment",
    "build_resolver",

    # Adapters
    "SystemClock",
    "FixedClock",
    "InMemorySettingsStore",
    "JsonFileSettingsStore",
    "StaticInstallRecordSource",
    "PackageInstallRecordSource",

    # Events
    "EventBus",
    "LoggingEventSink",
    "FileRecorderSink",

    # Errors
    "TrialGuardError",
    "TimestampDecodeError",
    "FactorReadError",
    "FactorPersistError",
    "SettingsStoreError",
    "InstallRecordNotFoundError",

    # Version
    "__version__",
]

# ----------------------------------------------------------------------
# Package version
# ----------------------------------------------------------------------

try:
    __version__ = version("trial-guard")
except PackageNotFoundError:
    __version__ = "0.0.0"
