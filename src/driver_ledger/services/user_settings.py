"""User settings service."""

import json
import logging
import math
from dataclasses import dataclass

from driver_ledger.domain.errors import InvalidSettings
from driver_ledger.domain.settings import UserSettings
from driver_ledger.services.records import KeyValueStore

SETTINGS_KEY = "driver-settings"

_logger = logging.getLogger(__name__)


@dataclass
class UserSettingsService:
    """Service for the weekly goal and day off."""

    store: KeyValueStore
    key: str = SETTINGS_KEY

    def get(self) -> UserSettings:
        """Return saved settings or the defaults.

        Stored values outside the allowed ranges are ignored in favour of the
        defaults.
        """
        raw = self.store.get(self.key)
        if raw is None:
            return UserSettings()
        payload = json.loads(raw)
        if not isinstance(payload, dict):
            raise RuntimeError(f"Stored value for {self.key} is not an object")
        defaults = UserSettings()
        try:
            settings = UserSettings(
                weekly_goal=float(payload.get("weeklyGoal", defaults.weekly_goal)),
                day_off=int(payload.get("dayOff", defaults.day_off)),
            )
            _validate(settings)
        except (TypeError, ValueError, OverflowError) as exc:
            _logger.warning("Ignoring stored settings under %s: %s", self.key, exc)
            return defaults
        return settings

    def set(self, settings: UserSettings) -> UserSettings:
        """Validate and persist settings."""
        _validate(settings)
        self.store.set(
            self.key,
            json.dumps(
                {"weeklyGoal": settings.weekly_goal, "dayOff": settings.day_off}
            ),
        )
        _logger.info(
            "Saved settings: weekly_goal=%.2f day_off=%s",
            settings.weekly_goal,
            settings.day_off,
        )
        return settings

    def set_from_form(
        self, weekly_goal: str | float, day_off: str | int
    ) -> UserSettings:
        """Parse settings dialog input and persist it."""
        try:
            goal = float(str(weekly_goal).strip())
        except ValueError as exc:
            raise InvalidSettings(f"Invalid weekly goal: {weekly_goal!r}") from exc
        try:
            day = int(str(day_off).strip())
        except ValueError as exc:
            raise InvalidSettings(f"Invalid day off: {day_off!r}") from exc
        return self.set(UserSettings(weekly_goal=goal, day_off=day))


def _validate(settings: UserSettings) -> None:
    if not math.isfinite(settings.weekly_goal) or settings.weekly_goal <= 0:
        raise InvalidSettings("Weekly goal must be a positive amount")
    if not 0 <= settings.day_off <= 6:  # noqa: PLR2004
        raise InvalidSettings("Day off must be between 0 (Sunday) and 6 (Saturday)")
