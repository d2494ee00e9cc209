"""Client roster business logic."""

import re
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from coach_dashboard.domain.clients import ClientRecord
from coach_dashboard.errors import NotFoundError, ValidationError

CLIENT_TAGS = frozenset({"in-person", "online", "premium"})
CLIENT_DURATIONS = frozenset({"new", "active", "paused", "inactive"})
DEFAULT_DURATION = "active"
_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")
_UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "email",
        "tag",
        "goal",
        "current_weight",
        "goal_weight",
        "duration",
        "last_checkin_at",
    }
)


class ClientRepository(Protocol):
    """Persistence interface for the client roster."""

    def create_client(self, payload: dict[str, object]) -> ClientRecord:
        """Create a client row and return it."""

    def update_client(
        self, client_id: UUID, payload: dict[str, object]
    ) -> ClientRecord | None:
        """Update a client row, returning None when it does not exist."""

    def get_client(self, client_id: UUID) -> ClientRecord | None:
        """Return a client by id, if present."""

    def list_clients(self) -> list[ClientRecord]:
        """Return every client on the roster."""


@dataclass
class ClientService:
    """Application service for roster actions."""

    repository: ClientRepository

    def create_client(self, payload: dict[str, object]) -> ClientRecord:
        """Validate and add a client to the roster."""
        record = _clean(payload, partial=False)
        now = datetime.now(tz=UTC).isoformat()
        record["duration"] = record.get("duration") or DEFAULT_DURATION
        record["last_active_at"] = now
        return self.repository.create_client(record)

    def update_client(
        self, client_id: UUID, payload: dict[str, object]
    ) -> ClientRecord:
        """Apply a partial update to a client."""
        record = _clean(payload, partial=True)
        if not record:
            return self.get_client(client_id)
        updated = self.repository.update_client(client_id, record)
        if updated is None:
            raise NotFoundError(f"Client {client_id} not found")
        return updated

    def get_client(self, client_id: UUID) -> ClientRecord:
        """Return a client or raise when it does not exist."""
        client = self.repository.get_client(client_id)
        if client is None:
            raise NotFoundError(f"Client {client_id} not found")
        return client

    def list_clients(
        self, search: str | None = None, tag: str | None = None
    ) -> list[ClientRecord]:
        """List clients, filtered by name/email substring and tag."""
        clients = self.repository.list_clients()
        needle = (search or "").strip().lower()
        if needle:
            clients = [
                client
                for client in clients
                if needle in client.name.lower() or needle in client.email.lower()
            ]
        if tag:
            clients = [client for client in clients if client.tag == tag]
        return sorted(clients, key=lambda client: client.name.lower())


def _clean(payload: dict[str, object], partial: bool) -> dict[str, object]:
    record = {key: value for key, value in payload.items() if key in _UPDATABLE_FIELDS}
    if "name" in record or not partial:
        name = str(record.get("name") or "").strip()
        if not name:
            raise ValidationError("Client name is required")
        record["name"] = name
    if "email" in record or not partial:
        email = str(record.get("email") or "").strip().lower()
        if not _EMAIL_RE.match(email):
            raise ValidationError("Valid email is required")
        record["email"] = email
    for key, allowed in (("tag", CLIENT_TAGS), ("duration", CLIENT_DURATIONS)):
        if key not in record:
            continue
        value = record[key]
        if value is None or value == "":
            record[key] = None
        elif not isinstance(value, str) or value not in allowed:
            raise ValidationError(f"Unknown client {key}: {value!r}")
    for key in ("current_weight", "goal_weight"):
        value = record.get(key)
        if value is None:
            continue
        try:
            weight = float(value)  # type: ignore[arg-type]
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"{key} must be a number") from exc
        if weight <= 0:
            raise ValidationError(f"{key} must be positive")
        record[key] = weight
    if isinstance(record.get("last_checkin_at"), datetime):
        record["last_checkin_at"] = record["last_checkin_at"].isoformat()
    return record
