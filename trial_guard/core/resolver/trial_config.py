"""Trial configuration model."""

from __future__ import annotations

import json
from datetime import timedelta
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from trial_guard.core.domain.timestamps import MS_PER_DAY
from trial_guard.core.factors.last_checked import LastCheckedConfig


class TrialConfig(BaseModel):
    """Structured trial configuration.

    JSON example:
        {
          "app_id": "my-app",
          "trial_duration_ms": 604800000,
          "last_checked": {"should_trigger_backup": false},
          "settings_dir": "~/.config/my-app"
        }
    """

    app_id: str = Field(..., min_length=1)
    trial_duration_ms: int = Field(..., gt=0)

    last_checked: LastCheckedConfig = Field(default_factory=LastCheckedConfig)

    # Only used by the file-backed settings store.
    settings_dir: Path | None = None

    model_config = ConfigDict(extra="forbid", frozen=True)

    @classmethod
    def from_json_obj(cls, trial_obj: dict[str, Any]) -> TrialConfig:
        """Create a TrialConfig instance from a JSON-compatible object."""
        return cls.model_validate(trial_obj)

    @classmethod
    def from_json_file(cls, path: str | Path) -> TrialConfig:
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(path)
        return cls.from_json_obj(json.loads(path.read_text(encoding="utf-8")))

    @classmethod
    def for_days(cls, days: int, *, app_id: str, **kwargs: Any) -> TrialConfig:
        """Shortcut for whole-day trials."""
        return cls(app_id=app_id, trial_duration_ms=days * MS_PER_DAY, **kwargs)

    @property
    def trial_duration(self) -> timedelta:
        return timedelta(milliseconds=self.trial_duration_ms)
