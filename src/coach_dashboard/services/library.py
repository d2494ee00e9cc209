"""Services for managing the coach food library."""

import math
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from coach_dashboard.domain.library import LibraryFood, MacroSplit
from coach_dashboard.errors import NotFoundError, ValidationError
from coach_dashboard.services.aggregation import parse_macro

SERVING_UNITS = frozenset(
    {"grams", "oz", "cups", "pieces", "slices", "tablespoons", "teaspoons"}
)
DEFAULT_SERVING_UNIT = "grams"
PROTEIN_KCAL_PER_G = 4
CARBS_KCAL_PER_G = 4
FATS_KCAL_PER_G = 9


class FoodLibraryRepository(Protocol):
    """Persistence interface for a coach's food library."""

    def create_food(self, coach_id: UUID, payload: dict[str, object]) -> LibraryFood:
        """Create a food entry and return it."""

    def get_food(self, food_id: UUID) -> LibraryFood | None:
        """Return a food entry by id, if present."""

    def list_foods(self, coach_id: UUID) -> list[LibraryFood]:
        """Return all foods of a coach."""


@dataclass
class FoodLibraryService:
    """Application service for library operations."""

    repository: FoodLibraryRepository

    def create_food(self, coach_id: UUID, payload: dict[str, object]) -> LibraryFood:
        """Validate a new food, derive its calories and persist it."""
        name = str(payload.get("name") or "").strip()
        if not name:
            raise ValidationError("Food name is required")
        unit = str(payload.get("serving_unit") or DEFAULT_SERVING_UNIT)
        if unit not in SERVING_UNITS:
            raise ValidationError(f"Unknown serving unit: {unit}")
        protein = parse_macro(payload.get("protein"))
        carbs = parse_macro(payload.get("carbs"))
        fats = parse_macro(payload.get("fats"))
        serving_size = parse_macro(payload.get("serving_size")) or 1.0
        if min(protein, carbs, fats, serving_size) < 0:
            raise ValidationError("Macros and serving size must not be negative")
        return self.repository.create_food(
            coach_id,
            {
                "name": name,
                "serving_size": serving_size,
                "serving_unit": unit,
                "calories": calculate_calories(protein, carbs, fats),
                "protein": protein,
                "carbs": carbs,
                "fats": fats,
                "notes": str(payload.get("notes") or "").strip(),
            },
        )

    def get_food(self, food_id: UUID) -> LibraryFood:
        """Return a food or raise when it does not exist."""
        food = self.repository.get_food(food_id)
        if food is None:
            raise NotFoundError(f"Food {food_id} not found")
        return food

    def search(self, coach_id: UUID, term: str | None = None) -> list[LibraryFood]:
        """Filter foods by name or notes, falling back to all foods."""
        foods = self.repository.list_foods(coach_id)
        needle = (term or "").strip().lower()
        if needle:
            foods = [
                food
                for food in foods
                if needle in food.name.lower() or needle in food.notes.lower()
            ]
        return self._newest_first(foods)

    @staticmethod
    def _newest_first(items: list[LibraryFood]) -> list[LibraryFood]:
        return sorted(
            items,
            key=lambda item: item.created_at or datetime.min.replace(tzinfo=UTC),
            reverse=True,
        )


def calculate_calories(protein: float, carbs: float, fats: float) -> float:
    """Return calories for the given grams, rounded half up to a whole number."""
    raw = (
        protein * PROTEIN_KCAL_PER_G
        + carbs * CARBS_KCAL_PER_G
        + fats * FATS_KCAL_PER_G
    )
    return float(math.floor(raw + 0.5))


def macro_split(food: LibraryFood) -> MacroSplit:
    """Return the share of a food's calories coming from each macro."""
    if food.calories <= 0:
        return MacroSplit(protein_pct=0, carbs_pct=0, fats_pct=0)

    def _pct(kcal: float) -> int:
        return math.floor(kcal / food.calories * 100 + 0.5)

    return MacroSplit(
        protein_pct=_pct(food.protein * PROTEIN_KCAL_PER_G),
        carbs_pct=_pct(food.carbs * CARBS_KCAL_PER_G),
        fats_pct=_pct(food.fats * FATS_KCAL_PER_G),
    )
