"""Daily macro aggregation over logged food entries."""

import math
from collections.abc import Iterable

from coach_dashboard.domain.nutrition import DailySummary, FoodEntry, MacroValue


def parse_macro(value: MacroValue | object) -> float:
    """Parse a stored macro value, treating anything unparseable as zero."""
    if value is None or isinstance(value, bool):
        return 0.0
    try:
        parsed = float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return 0.0
    if not math.isfinite(parsed):
        return 0.0
    return parsed


def aggregate_day(entries: Iterable[FoodEntry]) -> DailySummary:
    """Sum a day's food entries into a daily summary."""
    calories = protein = carbs = fats = 0.0
    count = 0
    for entry in entries:
        calories += parse_macro(entry.calories)
        protein += parse_macro(entry.protein)
        carbs += parse_macro(entry.carbs)
        fats += parse_macro(entry.fats)
        count += 1
    return DailySummary(
        calories=calories,
        protein=protein,
        carbs=carbs,
        fats=fats,
        entry_count=count,
    )
