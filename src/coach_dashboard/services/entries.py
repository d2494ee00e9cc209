"""Food entry logging for clients."""

import logging
from dataclasses import dataclass
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID

from coach_dashboard.domain.nutrition import MACRO_ORDER, FoodEntry
from coach_dashboard.errors import ValidationError
from coach_dashboard.services.aggregation import parse_macro
from coach_dashboard.services.library import FoodLibraryService
from coach_dashboard.services.weeks import day_key

logger = logging.getLogger(__name__)


class FoodEntryRepository(Protocol):
    """Persistence interface for day-bucketed food entries."""

    def list_entries_for_day(self, client_id: UUID, day_key: str) -> list[FoodEntry]:
        """Return the entries logged in a client's day bucket."""

    def create_entry(
        self, client_id: UUID, day_key: str, payload: dict[str, object]
    ) -> FoodEntry:
        """Create an entry in a client's day bucket and return it."""


@dataclass
class FoodLogService:
    """Service that records food entries into day buckets."""

    repository: FoodEntryRepository
    library_service: FoodLibraryService

    def log_entry(
        self, client_id: UUID, payload: dict[str, object], day: date | None = None
    ) -> FoodEntry:
        """Validate and store a food entry for the given day (today by default)."""
        name = str(payload.get("name") or "").strip()
        if not name:
            raise ValidationError("Food name is required")
        macros = {
            macro.value: parse_macro(payload.get(macro.value)) for macro in MACRO_ORDER
        }
        if any(value < 0 for value in macros.values()):
            raise ValidationError("Macros must not be negative")
        now = datetime.now(tz=UTC)
        key = day_key(day or now.date())
        entry = self.repository.create_entry(
            client_id,
            key,
            {"name": name, **macros, "timestamp": now.isoformat()},
        )
        logger.info(
            "Logged food entry",
            extra={"client_id": str(client_id), "day_key": key},
        )
        return entry

    def log_from_library(
        self,
        client_id: UUID,
        food_id: UUID,
        day: date | None = None,
        servings: float = 1.0,
    ) -> FoodEntry:
        """Log a library food, scaling its macros by the number of servings."""
        if servings <= 0:
            raise ValidationError("Servings must be positive")
        food = self.library_service.get_food(food_id)
        return self.log_entry(
            client_id,
            {
                "name": food.name,
                "calories": food.calories * servings,
                "protein": food.protein * servings,
                "carbs": food.carbs * servings,
                "fats": food.fats * servings,
            },
            day,
        )
