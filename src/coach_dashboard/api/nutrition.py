"""Client nutrition endpoints: weekly view, day detail and logging."""

from __future__ import annotations

from dataclasses import asdict
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Query, Request, status

from coach_dashboard.api.models import FoodEntryCreate, LibraryEntryCreate
from coach_dashboard.domain.nutrition import Macro, MacroVisibility
from coach_dashboard.services.aggregation import parse_macro
from coach_dashboard.services.charts import WEEKDAY_LABELS
from coach_dashboard.errors import ValidationError
from coach_dashboard.services.weeks import (
    day_key,
    entry_path,
    parse_day_key,
    shift_week,
)

if TYPE_CHECKING:
    from coach_dashboard.containers import AppContainer
    from coach_dashboard.domain.nutrition import (
        DailySummary,
        FoodEntry,
        WeeklyChart,
        WeeklyReport,
    )

router = APIRouter(prefix="/clients/{client_id}/nutrition", tags=["nutrition"])


@router.get("/week")
def weekly_report(
    client_id: UUID,
    request: Request,
    pivot: date | None = Query(default=None, alias="date"),
    hide: list[Macro] = Query(default=[]),
) -> dict[str, object]:
    """Return the chart series and stats for the week containing ``date``."""
    container: AppContainer = request.app.state.container
    report = container.nutrition_stats_service.get_week(
        client_id,
        pivot or datetime.now(tz=UTC).date(),
        MacroVisibility.hiding(hide),
    )
    return _serialize_report(report)


@router.get("/days/{key}")
def day_detail(client_id: UUID, key: str, request: Request) -> dict[str, object]:
    """Return one day's entries and totals."""
    container: AppContainer = request.app.state.container
    day = parse_day_key(key)
    summary, entries = container.nutrition_stats_service.get_day(client_id, day)
    return {
        "date": day.isoformat(),
        "day_key": key,
        "summary": _serialize_summary(summary),
        "entries": [_serialize_entry(entry) for entry in entries],
    }


@router.post("/entries", status_code=status.HTTP_201_CREATED)
def log_entry(
    client_id: UUID, payload: FoodEntryCreate, request: Request
) -> dict[str, object]:
    """Log a food entry into a day bucket."""
    container: AppContainer = request.app.state.container
    entry = container.food_log_service.log_entry(
        client_id, payload.model_dump(exclude={"day"}), payload.day
    )
    return _serialize_entry(entry)


@router.post("/entries/from-library", status_code=status.HTTP_201_CREATED)
def log_library_entry(
    client_id: UUID, payload: LibraryEntryCreate, request: Request
) -> dict[str, object]:
    """Log a food from the coach library."""
    container: AppContainer = request.app.state.container
    entry = container.food_log_service.log_from_library(
        client_id, payload.food_id, day=payload.day, servings=payload.servings
    )
    return _serialize_entry(entry)


def _serialize_report(report: WeeklyReport) -> dict[str, object]:
    week_start = report.dates[0]
    days = []
    for day in report.dates:
        key = day_key(day)
        days.append(
            {
                "date": day.isoformat(),
                "day_key": key,
                "label": WEEKDAY_LABELS[day.weekday()],
                **_serialize_summary(report.daily[key]),
            }
        )
    return {
        "client_id": str(report.client_id),
        "week_start": week_start.isoformat(),
        "previous_week": _neighbour_week(week_start, -1),
        "next_week": _neighbour_week(week_start, 1),
        "days": days,
        "chart": _serialize_chart(report.chart),
        "stats": {
            "total": asdict(report.stats.total),
            "average": asdict(report.stats.average),
            "days_with_data": report.stats.days_with_data,
            "policy": report.stats.policy.value,
        },
        "failed_days": report.failed_days,
    }


def _neighbour_week(week_start: date, weeks: int) -> str | None:
    try:
        return shift_week(week_start, weeks).isoformat()
    except ValidationError:
        return None


def _serialize_chart(chart: WeeklyChart) -> dict[str, object]:
    return {
        "labels": chart.labels,
        "datasets": [
            {
                "macro": dataset.macro.value,
                "label": dataset.label,
                "data": dataset.data,
                "borderColor": dataset.border_color,
                "backgroundColor": dataset.background_color,
            }
            for dataset in chart.datasets
        ],
    }


def _serialize_summary(summary: DailySummary) -> dict[str, object]:
    return {
        "calories": summary.calories,
        "protein": summary.protein,
        "carbs": summary.carbs,
        "fats": summary.fats,
        "entry_count": summary.entry_count,
        "has_data": summary.has_data,
    }


def _serialize_entry(entry: FoodEntry) -> dict[str, object]:
    return {
        "id": str(entry.id),
        "day_key": entry.day_key,
        "path": entry_path(entry.client_id, entry.day_key, entry.id),
        "name": entry.name,
        "calories": parse_macro(entry.calories),
        "protein": parse_macro(entry.protein),
        "carbs": parse_macro(entry.carbs),
        "fats": parse_macro(entry.fats),
        "timestamp": entry.timestamp.isoformat() if entry.timestamp else None,
    }
