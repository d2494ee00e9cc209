"""Domain models for the client roster."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class ClientRecord:
    """Represents a coached client stored in the database."""

    id: UUID
    name: str
    email: str
    tag: str | None
    goal: str | None
    current_weight: float | None
    goal_weight: float | None
    duration: str | None
    last_active_at: datetime | None
    last_checkin_at: datetime | None
    created_at: datetime | None
    updated_at: datetime | None
