"""Chart series assembly for the weekly nutrition panel."""

from collections.abc import Mapping, Sequence
from datetime import date

from coach_dashboard.domain.nutrition import (
    MACRO_ORDER,
    ChartDataset,
    DailySummary,
    Macro,
    MacroVisibility,
    WeeklyChart,
)
from coach_dashboard.services.weeks import day_key

WEEKDAY_LABELS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")

_DATASET_STYLE: dict[Macro, tuple[str, str, str]] = {
    Macro.CALORIES: ("Calories", "rgb(99, 102, 241)", "rgba(99, 102, 241, 0.1)"),
    Macro.PROTEIN: ("Protein", "rgb(16, 185, 129)", "rgba(16, 185, 129, 0.1)"),
    Macro.CARBS: ("Carbs", "rgb(245, 158, 11)", "rgba(245, 158, 11, 0.1)"),
    Macro.FATS: ("Fats", "rgb(239, 68, 68)", "rgba(239, 68, 68, 0.1)"),
}


def build_weekly_series(
    dates: Sequence[date],
    summaries: Mapping[str, DailySummary],
    visibility: MacroVisibility | None = None,
) -> WeeklyChart:
    """Build labels and one dataset per visible macro for a week."""
    resolved = visibility or MacroVisibility()
    labels = [WEEKDAY_LABELS[day.weekday()] for day in dates]
    datasets = []
    for macro in MACRO_ORDER:
        if not resolved.is_visible(macro):
            continue
        label, border, background = _DATASET_STYLE[macro]
        data = []
        for day in dates:
            summary = summaries.get(day_key(day))
            data.append(summary.value(macro) if summary else 0.0)
        datasets.append(
            ChartDataset(
                macro=macro,
                label=label,
                data=data,
                border_color=border,
                background_color=background,
            )
        )
    return WeeklyChart(labels=labels, datasets=datasets)
