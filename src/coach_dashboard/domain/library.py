"""Domain models for the coach food library."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class LibraryFood:
    """A reusable food created by a coach."""

    id: UUID
    coach_id: UUID
    name: str
    serving_size: float
    serving_unit: str
    calories: float
    protein: float
    carbs: float
    fats: float
    notes: str
    created_at: datetime | None


@dataclass(frozen=True)
class MacroSplit:
    """Share of calories coming from each macro, in whole percent."""

    protein_pct: int
    carbs_pct: int
    fats_pct: int
