"""Period totals, weekly goal tracking and chart rollups.

All calendar math happens in the timezone of the ``now`` (or ``tz``) passed
in, so "today" and "this week" follow the driver's local calendar. Weeks
start on Sunday.
"""

from calendar import monthrange
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from zoneinfo import ZoneInfo

from driver_ledger.domain.records import DailyRecord
from driver_ledger.domain.settings import UserSettings
from driver_ledger.domain.stats import (
    ChartPoint,
    GoalReport,
    GoalStatus,
    Period,
    PeriodTotals,
    TodaySummary,
)
from driver_ledger.services.ledger import utc_now
from driver_ledger.services.records import RecordStore
from driver_ledger.services.user_settings import UserSettingsService

MAX_PROGRESS = 100.0
DAYS_PER_WEEK = 7
CHART_DAYS = 7
CHART_WEEKS = 4
RECENT_LIMIT = 5

_STATUS_THRESHOLDS = (
    (100.0, GoalStatus.ACHIEVED),
    (80.0, GoalStatus.ALMOST),
    (60.0, GoalStatus.ON_TRACK),
    (40.0, GoalStatus.KEEP_GOING),
)


def filter_by_period(
    records: Iterable[DailyRecord], now: datetime, period: Period
) -> list[DailyRecord]:
    """Return the records that fall inside a history window."""
    today = _start_of_day(now)
    if period is Period.DAY:
        return [
            record
            for record in records
            if _local_date(record, now.tzinfo) == today.date()
        ]
    if period is Period.WEEK:
        cutoff = today - timedelta(days=DAYS_PER_WEEK)
    elif period is Period.MONTH:
        cutoff = _months_back(today, 1)
    else:
        return list(records)
    return [record for record in records if record.date >= cutoff]


def summarize(records: Iterable[DailyRecord]) -> PeriodTotals:
    """Sum revenue, costs and net profit."""
    selected = list(records)
    return PeriodTotals(
        records=selected,
        revenue=sum(record.revenue for record in selected),
        costs=sum(record.total_costs for record in selected),
        net_profit=sum(record.net_profit for record in selected),
    )


def today_summary(records: Iterable[DailyRecord], now: datetime) -> TodaySummary:
    """Return dashboard totals for the current local day.

    The average efficiency counts records without one as zero and is only
    reported when some distance was driven today.
    """
    todays = filter_by_period(records, now, Period.DAY)
    totals = summarize(todays)
    kilometers = sum(record.kilometers or 0.0 for record in todays)
    average_efficiency = None
    if kilometers > 0:
        average_efficiency = sum(
            record.fuel_efficiency or 0.0 for record in todays
        ) / len(todays)
    return TodaySummary(
        revenue=totals.revenue,
        costs=totals.costs,
        net_profit=totals.net_profit,
        kilometers=kilometers,
        average_efficiency=average_efficiency,
        record_count=len(todays),
    )


def week_start(now: datetime) -> datetime:
    """Return the most recent Sunday at local midnight."""
    return _start_of_day(now - timedelta(days=sunday_index(now)))


def weekly_total(records: Iterable[DailyRecord], now: datetime) -> float:
    """Sum net profit from the start of the week through now."""
    start = week_start(now)
    return sum(record.net_profit for record in records if start <= record.date <= now)


def goal_progress(total: float, weekly_goal: float) -> tuple[float, float]:
    """Return progress percent (capped at 100) and the amount still missing."""
    if weekly_goal <= 0:
        return MAX_PROGRESS, 0.0
    progress = min(total / weekly_goal * 100, MAX_PROGRESS)
    remaining = max(weekly_goal - total, 0.0)
    return progress, remaining


def working_days_left(now: datetime, day_off: int) -> int:
    """Count the days strictly between today and the next day off.

    The count wraps past Saturday. It is zero when today is the day off.
    """
    today = sunday_index(now)
    if today == day_off:
        return 0
    return (day_off - today) % DAYS_PER_WEEK - 1


def suggested_daily_target(remaining: float, days_left: int) -> float | None:
    """Split what is missing over the working days left."""
    if days_left <= 0:
        return None
    return remaining / days_left


def goal_status(progress: float) -> GoalStatus:
    for threshold, status in _STATUS_THRESHOLDS:
        if progress >= threshold:
            return status
    return GoalStatus.GETTING_STARTED


def build_goal_report(
    records: Iterable[DailyRecord], settings: UserSettings, now: datetime
) -> GoalReport:
    """Return weekly goal progress and the suggested daily target."""
    total = weekly_total(records, now)
    progress, remaining = goal_progress(total, settings.weekly_goal)
    days_left = working_days_left(now, settings.day_off)
    return GoalReport(
        weekly_goal=settings.weekly_goal,
        weekly_total=total,
        progress=progress,
        remaining=remaining,
        working_days_left=days_left,
        daily_target=suggested_daily_target(remaining, days_left),
        status=goal_status(progress),
    )


def daily_rollup(
    records: Iterable[DailyRecord], tz: tzinfo, days: int = CHART_DAYS
) -> list[ChartPoint]:
    """Group records by local day, keeping the latest days, oldest first."""
    buckets: dict[date, list[DailyRecord]] = {}
    for record in records:
        buckets.setdefault(_local_date(record, tz), []).append(record)
    return _chart_points(buckets, days)


def weekly_rollup(
    records: Iterable[DailyRecord], tz: tzinfo, weeks: int = CHART_WEEKS
) -> list[ChartPoint]:
    """Group records by Sunday week start, keeping the latest weeks, oldest first."""
    buckets: dict[date, list[DailyRecord]] = {}
    for record in records:
        day = _local_date(record, tz)
        start = day - timedelta(days=day.isoweekday() % DAYS_PER_WEEK)
        buckets.setdefault(start, []).append(record)
    return _chart_points(buckets, weeks)


def sunday_index(moment: datetime) -> int:
    """Return the weekday counting Sunday as 0."""
    return moment.isoweekday() % DAYS_PER_WEEK


def _chart_points(
    buckets: dict[date, list[DailyRecord]], limit: int
) -> list[ChartPoint]:
    if limit <= 0:
        return []
    points = []
    for start in sorted(buckets)[-limit:]:
        totals = summarize(buckets[start])
        points.append(
            ChartPoint(
                period_start=start,
                revenue=totals.revenue,
                costs=totals.costs,
                net_profit=totals.net_profit,
            )
        )
    return points


def _start_of_day(moment: datetime) -> datetime:
    return moment.replace(hour=0, minute=0, second=0, microsecond=0)


def _local_date(record: DailyRecord, tz: tzinfo | None) -> date:
    return record.date.astimezone(tz).date()


def _months_back(moment: datetime, months: int) -> datetime:
    total_month = (moment.month - 1) - months
    year = moment.year + total_month // 12
    month = (total_month % 12) + 1
    day = min(moment.day, monthrange(year, month)[1])
    return moment.replace(year=year, month=month, day=day)


@dataclass
class SummaryService:
    """Summaries over the live record list in the configured timezone."""

    record_store: RecordStore
    settings_service: UserSettingsService
    timezone_name: str = "UTC"
    clock: Callable[[], datetime] = field(default=utc_now)

    def now(self) -> datetime:
        """Return the current time in the configured timezone."""
        return self.clock().astimezone(ZoneInfo(self.timezone_name))

    def period(self, period: Period) -> PeriodTotals:
        """Return records and totals for a history window."""
        records = self.record_store.list_records()
        return summarize(filter_by_period(records, self.now(), period))

    def today(self) -> TodaySummary:
        """Return today's dashboard totals."""
        return today_summary(self.record_store.list_records(), self.now())

    def recent(self, limit: int = RECENT_LIMIT) -> list[DailyRecord]:
        """Return the latest records."""
        return self.record_store.list_records()[:limit]

    def weekly_goal(self) -> GoalReport:
        """Return progress toward the saved weekly goal."""
        return build_goal_report(
            self.record_store.list_records(),
            self.settings_service.get(),
            self.now(),
        )

    def daily_chart(self, days: int = CHART_DAYS) -> list[ChartPoint]:
        return daily_rollup(
            self.record_store.list_records(), ZoneInfo(self.timezone_name), days
        )

    def weekly_chart(self, weeks: int = CHART_WEEKS) -> list[ChartPoint]:
        return weekly_rollup(
            self.record_store.list_records(), ZoneInfo(self.timezone_name), weeks
        )
