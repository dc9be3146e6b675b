"""User settings domain model."""

from dataclasses import dataclass

DEFAULT_WEEKLY_GOAL = 1000.0
DEFAULT_DAY_OFF = 0

DAY_NAMES = (
    "Sunday",
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
)


@dataclass(frozen=True)
class UserSettings:
    """Weekly profit target and the weekday reserved as rest day.

    ``day_off`` counts from Sunday (0) to Saturday (6).
    """

    weekly_goal: float = DEFAULT_WEEKLY_GOAL
    day_off: int = DEFAULT_DAY_OFF

    @property
    def day_off_name(self) -> str:
        return DAY_NAMES[self.day_off]
