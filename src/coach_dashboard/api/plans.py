"""Nutrition plan endpoints and the coach meal collection."""

from __future__ import annotations

from dataclasses import asdict
from datetime import UTC, date, datetime
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Query, Request, status

from coach_dashboard.api.models import (
    MacroTargetsUpdate,
    MealCreate,
    PlanCreate,
    PlanUpdate,
)
from coach_dashboard.errors import ValidationError
from coach_dashboard.services.plans import target_progress

if TYPE_CHECKING:
    from coach_dashboard.containers import AppContainer
    from coach_dashboard.domain.plans import Meal, NutritionPlan

router = APIRouter(prefix="/clients/{client_id}/nutrition/plans", tags=["plans"])
meals_router = APIRouter(prefix="/coaches/{coach_id}/meals", tags=["plans"])


@router.get("")
def list_plans(client_id: UUID, request: Request) -> dict[str, object]:
    """Return a client's plans, newest first."""
    container: AppContainer = request.app.state.container
    plans = container.plan_service.list_plans(client_id)
    return {"plans": [_serialize_plan(plan) for plan in plans]}


@router.post("", status_code=status.HTTP_201_CREATED)
def create_plan(
    client_id: UUID, payload: PlanCreate, request: Request
) -> dict[str, object]:
    """Create a plan for a client."""
    container: AppContainer = request.app.state.container
    plan = container.plan_service.create_plan(client_id, payload.model_dump())
    return _serialize_plan(plan)


@router.get("/{plan_id}")
def plan_detail(client_id: UUID, plan_id: UUID, request: Request) -> dict[str, object]:
    """Return a plan with its meals and effective daily targets."""
    container: AppContainer = request.app.state.container
    plan = container.plan_service.get_plan(client_id, plan_id)
    meals = container.plan_service.list_meals(client_id, plan_id)
    targets = container.plan_service.targets_for(plan)
    return {
        **_serialize_plan(plan),
        "meals": [_serialize_meal(meal) for meal in meals],
        "daily_targets": asdict(targets) if targets else None,
    }


@router.patch("/{plan_id}")
def update_plan(
    client_id: UUID, plan_id: UUID, payload: PlanUpdate, request: Request
) -> dict[str, object]:
    """Update a plan's name or description."""
    container: AppContainer = request.app.state.container
    plan = container.plan_service.update_plan(
        client_id, plan_id, payload.model_dump(exclude_unset=True)
    )
    return _serialize_plan(plan)


@router.put("/{plan_id}/macros")
def set_macro_targets(
    client_id: UUID, plan_id: UUID, payload: MacroTargetsUpdate, request: Request
) -> dict[str, object]:
    """Set the daily targets of a total-macros plan."""
    container: AppContainer = request.app.state.container
    plan = container.plan_service.set_macro_targets(
        client_id, plan_id, payload.model_dump()
    )
    return _serialize_plan(plan)


@router.post("/{plan_id}/meals", status_code=status.HTTP_201_CREATED)
def add_meal(
    client_id: UUID, plan_id: UUID, payload: MealCreate, request: Request
) -> dict[str, object]:
    """Add a meal to a plan."""
    container: AppContainer = request.app.state.container
    meal = container.plan_service.add_meal(client_id, plan_id, payload.model_dump())
    return _serialize_meal(meal)


@router.get("/{plan_id}/progress")
def plan_progress(
    client_id: UUID,
    plan_id: UUID,
    request: Request,
    pivot: date | None = Query(default=None, alias="date"),
) -> dict[str, object]:
    """Compare the week's average daily intake with the plan targets."""
    container: AppContainer = request.app.state.container
    plan = container.plan_service.get_plan(client_id, plan_id)
    targets = container.plan_service.targets_for(plan)
    if targets is None:
        raise ValidationError(f"Plan {plan_id} has no macro targets")
    report = container.nutrition_stats_service.get_week(
        client_id, pivot or datetime.now(tz=UTC).date()
    )
    return {
        "plan_id": str(plan.id),
        "week_start": report.dates[0].isoformat(),
        "targets": asdict(targets),
        "average": asdict(report.stats.average),
        "progress": asdict(target_progress(targets, report.stats.average)),
        "failed_days": report.failed_days,
    }


@meals_router.get("")
def list_meals(coach_id: UUID, request: Request) -> dict[str, object]:
    """Return the coach's standalone meals."""
    container: AppContainer = request.app.state.container
    meals = container.plan_service.list_standalone_meals(coach_id)
    return {"meals": [_serialize_meal(meal) for meal in meals]}


@meals_router.post("", status_code=status.HTTP_201_CREATED)
def create_meal(
    coach_id: UUID, payload: MealCreate, request: Request
) -> dict[str, object]:
    """Add a meal to the coach's collection."""
    container: AppContainer = request.app.state.container
    meal = container.plan_service.create_standalone_meal(
        coach_id, payload.model_dump()
    )
    return _serialize_meal(meal)


def _serialize_plan(plan: NutritionPlan) -> dict[str, object]:
    return {
        "id": str(plan.id),
        "client_id": str(plan.client_id),
        "name": plan.name,
        "description": plan.description,
        "plan_type": plan.plan_type.value,
        "macros": asdict(plan.targets) if plan.targets else None,
        "created_at": plan.created_at.isoformat() if plan.created_at else None,
    }


def _serialize_meal(meal: Meal) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "plan_id": str(meal.plan_id) if meal.plan_id else None,
        "name": meal.name,
        "description": meal.description,
        "instructions": meal.instructions,
        "notes": meal.notes,
        "protein": meal.protein,
        "carbs": meal.carbs,
        "fats": meal.fats,
    }
