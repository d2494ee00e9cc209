"""Supabase implementation for nutrition plans and meals."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from coach_dashboard.domain.plans import MacroTargets, Meal, NutritionPlan, PlanType
from coach_dashboard.services.plans import PlanRepository

_PLANS_TABLE = "nutrition_plans"
_MEALS_TABLE = "nutrition_meals"


@dataclass
class SupabasePlanRepository(PlanRepository):
    """Supabase-backed repository for plans, plan meals and coach meals."""

    client: Client

    def create_plan(self, client_id: UUID, payload: dict[str, object]) -> NutritionPlan:
        """Create a plan for a client and return it."""
        response = (
            self.client.table(_PLANS_TABLE)
            .insert({"client_id": str(client_id), **payload})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create nutrition plan")
        return _parse_plan(response.data[0])

    def get_plan(self, plan_id: UUID) -> NutritionPlan | None:
        """Return a plan by id, if present."""
        response = (
            self.client.table(_PLANS_TABLE)
            .select("*")
            .eq("id", str(plan_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def list_plans(self, client_id: UUID) -> list[NutritionPlan]:
        """Return a client's plans, newest first."""
        response = (
            self.client.table(_PLANS_TABLE)
            .select("*")
            .eq("client_id", str(client_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_plan(row) for row in response.data or []]

    def update_plan(
        self, plan_id: UUID, payload: dict[str, object]
    ) -> NutritionPlan | None:
        """Update a plan row, returning None when it does not exist."""
        response = (
            self.client.table(_PLANS_TABLE)
            .update(payload)
            .eq("id", str(plan_id))
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def create_meal(self, payload: dict[str, object]) -> Meal:
        """Create a plan meal or a standalone meal."""
        response = self.client.table(_MEALS_TABLE).insert(payload).execute()
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return _parse_meal(response.data[0])

    def list_plan_meals(self, plan_id: UUID) -> list[Meal]:
        """Return the meals of a plan in creation order."""
        response = (
            self.client.table(_MEALS_TABLE)
            .select("*")
            .eq("plan_id", str(plan_id))
            .order("created_at")
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]

    def list_coach_meals(self, coach_id: UUID) -> list[Meal]:
        """Return a coach's standalone meals."""
        response = (
            self.client.table(_MEALS_TABLE)
            .select("*")
            .eq("coach_id", str(coach_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_meal(row) for row in response.data or []]


def _parse_plan(row: dict[str, object]) -> NutritionPlan:
    """Parse a plan row into a domain model."""
    macros = row.get("macros")
    targets = (
        MacroTargets(
            calories=int(macros.get("calories") or 0),
            protein=int(macros.get("protein") or 0),
            carbs=int(macros.get("carbs") or 0),
            fats=int(macros.get("fats") or 0),
        )
        if isinstance(macros, dict)
        else None
    )
    return NutritionPlan(
        id=UUID(str(row["id"])),
        client_id=UUID(str(row["client_id"])),
        name=str(row.get("name", "")),
        description=str(row.get("description") or ""),
        plan_type=PlanType(row.get("plan_type") or PlanType.MEAL_PLAN.value),
        targets=targets,
        created_at=_to_datetime(row.get("created_at")),
    )


def _parse_meal(row: dict[str, object]) -> Meal:
    """Parse a meal row into a domain model."""
    plan_id = row.get("plan_id")
    coach_id = row.get("coach_id")
    return Meal(
        id=UUID(str(row["id"])),
        name=str(row.get("name", "")),
        plan_id=UUID(str(plan_id)) if plan_id else None,
        coach_id=UUID(str(coach_id)) if coach_id else None,
        description=str(row.get("description") or ""),
        instructions=str(row.get("instructions") or ""),
        notes=str(row.get("notes") or ""),
        protein=int(row.get("protein") or 0),
        carbs=int(row.get("carbs") or 0),
        fats=int(row.get("fats") or 0),
        created_at=_to_datetime(row.get("created_at")),
    )


def _to_datetime(value: object) -> datetime | None:
    if isinstance(value, str) and value:
        return datetime.fromisoformat(value)
    return None
