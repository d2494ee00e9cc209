"""Client roster endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, status

from coach_dashboard.api.models import ClientCreate, ClientUpdate

if TYPE_CHECKING:
    from coach_dashboard.containers import AppContainer
    from coach_dashboard.domain.clients import ClientRecord

router = APIRouter(prefix="/clients", tags=["clients"])


@router.get("")
def list_clients(
    request: Request, search: str | None = None, tag: str | None = None
) -> dict[str, object]:
    """Return the roster, optionally filtered."""
    container: AppContainer = request.app.state.container
    clients = container.client_service.list_clients(search=search, tag=tag)
    return {"clients": [_serialize_client(client) for client in clients]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_client(payload: ClientCreate, request: Request) -> dict[str, object]:
    """Add a client to the roster."""
    container: AppContainer = request.app.state.container
    client = container.client_service.create_client(payload.model_dump())
    return _serialize_client(client)


@router.get("/{client_id}")
def client_detail(client_id: UUID, request: Request) -> dict[str, object]:
    """Return a single client."""
    container: AppContainer = request.app.state.container
    return _serialize_client(container.client_service.get_client(client_id))


@router.patch("/{client_id}")
def update_client(
    client_id: UUID, payload: ClientUpdate, request: Request
) -> dict[str, object]:
    """Apply a partial update to a client."""
    container: AppContainer = request.app.state.container
    client = container.client_service.update_client(
        client_id, payload.model_dump(exclude_unset=True)
    )
    return _serialize_client(client)


def _serialize_client(client: ClientRecord) -> dict[str, object]:
    return {
        "id": str(client.id),
        "name": client.name,
        "email": client.email,
        "tag": client.tag,
        "goal": client.goal,
        "current_weight": client.current_weight,
        "goal_weight": client.goal_weight,
        "duration": client.duration,
        "last_active_at": client.last_active_at.isoformat()
        if client.last_active_at
        else None,
        "last_checkin_at": client.last_checkin_at.isoformat()
        if client.last_checkin_at
        else None,
    }
