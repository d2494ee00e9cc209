"""Weekly nutrition statistics for a client."""

import logging
from collections.abc import Mapping, Sequence
from dataclasses import dataclass
from datetime import date
from uuid import UUID

from coach_dashboard.domain.nutrition import (
    MACRO_ORDER,
    DailySummary,
    FoodEntry,
    MacroTotals,
    MacroVisibility,
    MissingDayPolicy,
    WeeklyReport,
    WeeklyStats,
)
from coach_dashboard.services.aggregation import aggregate_day
from coach_dashboard.services.charts import build_weekly_series
from coach_dashboard.services.entries import FoodEntryRepository
from coach_dashboard.services.weeks import WEEK_LENGTH, day_key, week_range

logger = logging.getLogger(__name__)


@dataclass
class NutritionStatsService:
    """Service that fetches a week of food entries and summarises it."""

    repository: FoodEntryRepository
    missing_day_policy: MissingDayPolicy = MissingDayPolicy.ZERO_FILL

    def get_week(
        self,
        client_id: UUID,
        pivot: date,
        visibility: MacroVisibility | None = None,
    ) -> WeeklyReport:
        """Return daily summaries, chart series and stats for the pivot's week."""
        dates = week_range(pivot)
        daily, failed_days = self._fetch_week(client_id, dates)
        return WeeklyReport(
            client_id=client_id,
            dates=dates,
            daily=daily,
            chart=build_weekly_series(dates, daily, visibility),
            stats=compute_weekly_stats(dates, daily, self.missing_day_policy),
            failed_days=failed_days,
        )

    def get_day(
        self, client_id: UUID, day: date
    ) -> tuple[DailySummary, list[FoodEntry]]:
        """Return one day's summary together with its entries."""
        entries = self.repository.list_entries_for_day(client_id, day_key(day))
        return aggregate_day(entries), entries

    def _fetch_week(
        self, client_id: UUID, dates: list[date]
    ) -> tuple[dict[str, DailySummary], list[str]]:
        daily: dict[str, DailySummary] = {}
        failed_days: list[str] = []
        for day in dates:
            key = day_key(day)
            try:
                entries = self.repository.list_entries_for_day(client_id, key)
            except Exception:
                logger.exception(
                    "Failed to fetch food entries",
                    extra={"client_id": str(client_id), "day_key": key},
                )
                failed_days.append(key)
                entries = []
            daily[key] = aggregate_day(entries)
        return daily, failed_days


def compute_weekly_stats(
    dates: Sequence[date],
    summaries: Mapping[str, DailySummary],
    policy: MissingDayPolicy = MissingDayPolicy.ZERO_FILL,
) -> WeeklyStats:
    """Return weekly totals and per-day averages for each macro.

    With ``ZERO_FILL`` the average is always the total over seven days; days
    without logs count as zero. ``EXCLUDE`` divides by the days that have at
    least one entry instead.
    """
    totals = dict.fromkeys(MACRO_ORDER, 0.0)
    days_with_data = 0
    for day in dates:
        summary = summaries.get(day_key(day))
        if summary is None:
            continue
        if summary.has_data:
            days_with_data += 1
        for macro in MACRO_ORDER:
            totals[macro] += summary.value(macro)

    divisor = WEEK_LENGTH if policy is MissingDayPolicy.ZERO_FILL else days_with_data
    total = MacroTotals(**{macro.value: value for macro, value in totals.items()})
    if divisor == 0:
        average = MacroTotals()
    else:
        average = MacroTotals(
            **{macro.value: value / divisor for macro, value in totals.items()}
        )
    return WeeklyStats(
        total=total,
        average=average,
        days_with_data=days_with_data,
        policy=policy,
    )
