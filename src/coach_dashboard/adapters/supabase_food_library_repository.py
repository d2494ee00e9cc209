"""Supabase implementation for the coach food library."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from coach_dashboard.domain.library import LibraryFood
from coach_dashboard.services.library import FoodLibraryRepository


@dataclass
class SupabaseFoodLibraryRepository(FoodLibraryRepository):
    """Supabase-backed repository for coach food libraries."""

    client: Client

    def create_food(self, coach_id: UUID, payload: dict[str, object]) -> LibraryFood:
        """Create a food entry and return it."""
        response = (
            self.client.table("nutrition_foods")
            .insert({"coach_id": str(coach_id), **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food entry")
        return _parse_food(response.data[0])

    def get_food(self, food_id: UUID) -> LibraryFood | None:
        """Return a food entry by id, if present."""
        response = (
            self.client.table("nutrition_foods")
            .select("*")
            .eq("id", str(food_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_food(response.data[0])

    def list_foods(self, coach_id: UUID) -> list[LibraryFood]:
        """Return a coach's foods, newest first."""
        response = (
            self.client.table("nutrition_foods")
            .select("*")
            .eq("coach_id", str(coach_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_food(row) for row in response.data or []]


def _parse_food(row: dict[str, object]) -> LibraryFood:
    """Parse a library food row into a domain model."""
    created_raw = row.get("created_at")
    created_at = (
        datetime.fromisoformat(created_raw)
        if isinstance(created_raw, str) and created_raw
        else None
    )
    return LibraryFood(
        id=UUID(str(row["id"])),
        coach_id=UUID(str(row["coach_id"])),
        name=str(row.get("name", "")),
        serving_size=float(row.get("serving_size") or 1.0),
        serving_unit=str(row.get("serving_unit") or "grams"),
        calories=float(row.get("calories") or 0.0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fats=float(row.get("fats") or 0.0),
        notes=str(row.get("notes") or ""),
        created_at=created_at,
    )
