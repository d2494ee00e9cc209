"""Supabase-backed client roster repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from coach_dashboard.domain.clients import ClientRecord
from coach_dashboard.services.clients import ClientRepository


@dataclass
class SupabaseClientRepository(ClientRepository):
    """Supabase implementation for roster persistence."""

    client: Client

    def create_client(self, payload: dict[str, object]) -> ClientRecord:
        """Create a new client row and return it."""
        response = self.client.table("clients").insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create client in Supabase")
        return _parse_client(response.data[0])

    def update_client(
        self, client_id: UUID, payload: dict[str, object]
    ) -> ClientRecord | None:
        """Update a client row and return it, if it exists."""
        response = (
            self.client.table("clients")
            .update({**payload, "updated_at": datetime.now(tz=UTC).isoformat()})
            .eq("id", str(client_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_client(response.data[0])

    def get_client(self, client_id: UUID) -> ClientRecord | None:
        """Return a client by id, if present."""
        response = (
            self.client.table("clients")
            .select("*")
            .eq("id", str(client_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_client(response.data[0])

    def list_clients(self) -> list[ClientRecord]:
        """Return all clients ordered by name."""
        response = self.client.table("clients").select("*").order("name").execute()
        return [_parse_client(row) for row in response.data or []]


def _parse_client(row: dict[str, object]) -> ClientRecord:
    return ClientRecord(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        email=str(row.get("email", "")),
        tag=row.get("tag"),
        goal=row.get("goal"),
        current_weight=_to_optional_float(row.get("current_weight")),
        goal_weight=_to_optional_float(row.get("goal_weight")),
        duration=row.get("duration"),
        last_active_at=_to_datetime(row.get("last_active_at")),
        last_checkin_at=_to_datetime(row.get("last_checkin_at")),
        created_at=_to_datetime(row.get("created_at")),
        updated_at=_to_datetime(row.get("updated_at")),
    )


def _to_datetime(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None


def _to_optional_float(value: object) -> float | None:
    if value is None:
        return None
    return float(value)  # type: ignore[arg-type]
