"""Supabase repository for day-bucketed food entries."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from coach_dashboard.domain.nutrition import FoodEntry
from coach_dashboard.services.entries import FoodEntryRepository

_ENTRY_COLUMNS = (
    "id, client_id, day_key, name, calories, protein, carbs, fats, timestamp"
)


@dataclass
class SupabaseFoodEntryRepository(FoodEntryRepository):
    """Supabase implementation for food entries.

    Rows live in ``food_entries`` and are keyed by ``(client_id, day_key)``,
    mirroring the ``users/{client}/foods/{day}/entries`` document layout.
    """

    client: Client

    def list_entries_for_day(self, client_id: UUID, day_key: str) -> list[FoodEntry]:
        """Return a client's entries for one day bucket, oldest first."""
        response = (
            self.client.table("food_entries")
            .select(_ENTRY_COLUMNS)
            .eq("client_id", str(client_id))
            .eq("day_key", day_key)
            .order("timestamp", desc=False)
            .execute()
        )
        return [_parse_entry(row) for row in response.data or []]

    def create_entry(
        self, client_id: UUID, day_key: str, payload: dict[str, object]
    ) -> FoodEntry:
        """Insert an entry into a day bucket and return it."""
        response = (
            self.client.table("food_entries")
            .insert({"client_id": str(client_id), "day_key": day_key, **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create food entry")
        return _parse_entry(response.data[0])


def _parse_entry(row: dict[str, object]) -> FoodEntry:
    timestamp_raw = row.get("timestamp")
    timestamp = (
        datetime.fromisoformat(timestamp_raw)
        if isinstance(timestamp_raw, str) and timestamp_raw
        else None
    )
    return FoodEntry(
        id=UUID(str(row["id"])),
        client_id=UUID(str(row["client_id"])),
        day_key=str(row.get("day_key", "")),
        name=str(row.get("name") or ""),
        calories=row.get("calories"),
        protein=row.get("protein"),
        carbs=row.get("carbs"),
        fats=row.get("fats"),
        timestamp=timestamp,
    )
