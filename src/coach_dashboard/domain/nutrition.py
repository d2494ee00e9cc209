"""Domain models for client nutrition tracking."""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import date, datetime
from enum import Enum
from uuid import UUID

MacroValue = str | int | float | None


class Macro(str, Enum):
    """Macronutrient quantities tracked per food entry."""

    CALORIES = "calories"
    PROTEIN = "protein"
    CARBS = "carbs"
    FATS = "fats"


MACRO_ORDER = (Macro.CALORIES, Macro.PROTEIN, Macro.CARBS, Macro.FATS)


class MissingDayPolicy(str, Enum):
    """How days without logs count towards weekly averages."""

    ZERO_FILL = "zero_fill"
    EXCLUDE = "exclude"


@dataclass(frozen=True)
class FoodEntry:
    """A logged food entry as read from the document store.

    Macro fields are kept as stored; some writers persist them as strings.
    """

    id: UUID
    client_id: UUID
    day_key: str
    name: str
    calories: MacroValue = None
    protein: MacroValue = None
    carbs: MacroValue = None
    fats: MacroValue = None
    timestamp: datetime | None = None


@dataclass(frozen=True)
class MacroTotals:
    """Numeric totals for each macro."""

    calories: float = 0.0
    protein: float = 0.0
    carbs: float = 0.0
    fats: float = 0.0

    def value(self, macro: Macro) -> float:
        """Return the amount for a single macro."""
        return getattr(self, macro.value)


@dataclass(frozen=True)
class DailySummary(MacroTotals):
    """Summed macros for one day of food entries."""

    entry_count: int = 0

    @property
    def has_data(self) -> bool:
        """Return true when at least one entry was logged."""
        return self.entry_count > 0


@dataclass(frozen=True)
class MacroVisibility:
    """Which macro series are shown on the weekly chart."""

    calories: bool = True
    protein: bool = True
    carbs: bool = True
    fats: bool = True

    @classmethod
    def hiding(cls, hidden: Iterable[Macro]) -> "MacroVisibility":
        """Return a visibility with the given macros turned off."""
        return replace(cls(), **{macro.value: False for macro in hidden})

    def is_visible(self, macro: Macro) -> bool:
        """Return true when the macro series is shown."""
        return getattr(self, macro.value)


@dataclass(frozen=True)
class ChartDataset:
    """One macro series of the weekly chart."""

    macro: Macro
    label: str
    data: list[float]
    border_color: str
    background_color: str


@dataclass(frozen=True)
class WeeklyChart:
    """Chart-ready weekly series: one label per day, one dataset per macro."""

    labels: list[str]
    datasets: list[ChartDataset]


@dataclass(frozen=True)
class WeeklyStats:
    """Weekly totals and per-day averages."""

    total: MacroTotals
    average: MacroTotals
    days_with_data: int
    policy: MissingDayPolicy


@dataclass(frozen=True)
class WeeklyReport:
    """Everything the nutrition panel needs for one displayed week."""

    client_id: UUID
    dates: list[date]
    daily: dict[str, DailySummary]
    chart: WeeklyChart
    stats: WeeklyStats
    failed_days: list[str]
