"""Coach food library endpoints."""

from __future__ import annotations

from dataclasses import asdict
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Request, status

from coach_dashboard.api.models import LibraryFoodCreate
from coach_dashboard.errors import NotFoundError
from coach_dashboard.services.library import macro_split

if TYPE_CHECKING:
    from coach_dashboard.containers import AppContainer
    from coach_dashboard.domain.library import LibraryFood

router = APIRouter(prefix="/coaches/{coach_id}/foods", tags=["library"])


@router.get("")
def search_foods(
    coach_id: UUID, request: Request, q: str | None = None
) -> dict[str, object]:
    """Return library foods matching a search term."""
    container: AppContainer = request.app.state.container
    foods = container.food_library_service.search(coach_id, q)
    return {"foods": [_serialize_food(food) for food in foods]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_food(
    coach_id: UUID, payload: LibraryFoodCreate, request: Request
) -> dict[str, object]:
    """Add a food to the coach library."""
    container: AppContainer = request.app.state.container
    food = container.food_library_service.create_food(coach_id, payload.model_dump())
    return _serialize_food(food)


@router.get("/{food_id}")
def food_detail(coach_id: UUID, food_id: UUID, request: Request) -> dict[str, object]:
    """Return a single library food owned by the coach."""
    container: AppContainer = request.app.state.container
    food = container.food_library_service.get_food(food_id)
    if food.coach_id != coach_id:
        raise NotFoundError(f"Food {food_id} not found")
    return _serialize_food(food)


def _serialize_food(food: LibraryFood) -> dict[str, object]:
    return {
        "id": str(food.id),
        "name": food.name,
        "serving_size": food.serving_size,
        "serving_unit": food.serving_unit,
        "calories": food.calories,
        "protein": food.protein,
        "carbs": food.carbs,
        "fats": food.fats,
        "notes": food.notes,
        "macro_split": asdict(macro_split(food)),
        "created_at": food.created_at.isoformat() if food.created_at else None,
    }
