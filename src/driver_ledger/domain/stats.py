"""Domain models for summaries, goals and chart series."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from driver_ledger.domain.records import DailyRecord


class Period(StrEnum):
    """History filter windows."""

    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    ALL = "all"


class GoalStatus(StrEnum):
    """Progress tier used to pick an encouragement message."""

    ACHIEVED = "achieved"
    ALMOST = "almost"
    ON_TRACK = "on_track"
    KEEP_GOING = "keep_going"
    GETTING_STARTED = "getting_started"


@dataclass(frozen=True)
class PeriodTotals:
    """Records in a window and their sums."""

    records: list[DailyRecord]
    revenue: float
    costs: float
    net_profit: float


@dataclass(frozen=True)
class TodaySummary:
    """Dashboard totals for the current day."""

    revenue: float
    costs: float
    net_profit: float
    kilometers: float
    average_efficiency: float | None
    record_count: int


@dataclass(frozen=True)
class GoalReport:
    """Progress toward the weekly profit goal."""

    weekly_goal: float
    weekly_total: float
    progress: float
    remaining: float
    working_days_left: int
    daily_target: float | None
    status: GoalStatus


@dataclass(frozen=True)
class ChartPoint:
    """One bucket of a revenue/cost/profit series."""

    period_start: date
    revenue: float
    costs: float
    net_profit: float

    @property
    def label(self) -> str:
        return self.period_start.strftime("%d/%m")
