"""Nutrition plans, plan meals and standalone coach meals."""

import logging
import math
from dataclasses import asdict, dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID

from coach_dashboard.domain.nutrition import MacroTotals
from coach_dashboard.domain.plans import (
    MacroTargets,
    Meal,
    NutritionPlan,
    PlanType,
    TargetProgress,
)
from coach_dashboard.errors import NotFoundError, ValidationError
from coach_dashboard.services.aggregation import parse_macro
from coach_dashboard.services.library import calculate_calories

logger = logging.getLogger(__name__)


class PlanRepository(Protocol):
    """Persistence interface for plans and meals."""

    def create_plan(self, client_id: UUID, payload: dict[str, object]) -> NutritionPlan:
        """Create a plan for a client and return it."""

    def get_plan(self, plan_id: UUID) -> NutritionPlan | None:
        """Return a plan by id, if present."""

    def list_plans(self, client_id: UUID) -> list[NutritionPlan]:
        """Return every plan of a client."""

    def update_plan(
        self, plan_id: UUID, payload: dict[str, object]
    ) -> NutritionPlan | None:
        """Update a plan row, returning None when it does not exist."""

    def create_meal(self, payload: dict[str, object]) -> Meal:
        """Create a plan meal or a standalone meal."""

    def list_plan_meals(self, plan_id: UUID) -> list[Meal]:
        """Return the meals of a plan."""

    def list_coach_meals(self, coach_id: UUID) -> list[Meal]:
        """Return a coach's standalone meals."""


@dataclass
class PlanService:
    """Application service for nutrition planning."""

    repository: PlanRepository

    def create_plan(self, client_id: UUID, payload: dict[str, object]) -> NutritionPlan:
        """Validate and create a plan for a client."""
        raw_type = payload.get("plan_type") or PlanType.MEAL_PLAN.value
        try:
            plan_type = PlanType(raw_type)
        except ValueError as exc:
            raise ValidationError(f"Unknown plan type: {raw_type!r}") from exc
        plan = self.repository.create_plan(
            client_id,
            {
                "name": _required_name(payload, "Plan"),
                "description": _text(payload, "description"),
                "plan_type": plan_type.value,
            },
        )
        logger.info(
            "Created nutrition plan",
            extra={"client_id": str(client_id), "plan_type": plan_type.value},
        )
        return plan

    def get_plan(self, client_id: UUID, plan_id: UUID) -> NutritionPlan:
        """Return a client's plan or raise when it does not exist."""
        plan = self.repository.get_plan(plan_id)
        if plan is None or plan.client_id != client_id:
            raise NotFoundError(f"Plan {plan_id} not found")
        return plan

    def list_plans(self, client_id: UUID) -> list[NutritionPlan]:
        """Return a client's plans, newest first."""
        return sorted(
            self.repository.list_plans(client_id),
            key=lambda plan: plan.created_at or datetime.min.replace(tzinfo=UTC),
            reverse=True,
        )

    def update_plan(
        self, client_id: UUID, plan_id: UUID, payload: dict[str, object]
    ) -> NutritionPlan:
        """Rename a plan or change its description."""
        self.get_plan(client_id, plan_id)
        changes: dict[str, object] = {}
        if "name" in payload:
            changes["name"] = _required_name(payload, "Plan")
        if "description" in payload:
            changes["description"] = _text(payload, "description")
        return self._update(plan_id, changes)

    def set_macro_targets(
        self, client_id: UUID, plan_id: UUID, payload: dict[str, object]
    ) -> NutritionPlan:
        """Store daily macro targets on a total-macros plan."""
        plan = self.get_plan(client_id, plan_id)
        if plan.plan_type is not PlanType.TOTAL_MACROS:
            raise ValidationError("Only total-macros plans have daily targets")
        targets = MacroTargets(
            calories=parse_target(payload.get("calories")),
            protein=parse_target(payload.get("protein")),
            carbs=parse_target(payload.get("carbs")),
            fats=parse_target(payload.get("fats")),
        )
        return self._update(plan_id, {"macros": asdict(targets)})

    def add_meal(
        self, client_id: UUID, plan_id: UUID, payload: dict[str, object]
    ) -> Meal:
        """Add a meal to a meal plan or a macros-by-meal plan."""
        plan = self.get_plan(client_id, plan_id)
        record: dict[str, object] = {
            "plan_id": str(plan.id),
            "name": _required_name(payload, "Meal"),
        }
        if plan.plan_type is PlanType.MEAL_PLAN:
            record["description"] = _text(payload, "description")
            record["instructions"] = _text(payload, "instructions")
        elif plan.plan_type is PlanType.MACROS_BY_MEAL:
            record["notes"] = _text(payload, "notes")
            for key in ("protein", "carbs", "fats"):
                record[key] = parse_target(payload.get(key))
        else:
            raise ValidationError("Total-macros plans do not contain meals")
        return self.repository.create_meal(record)

    def list_meals(self, client_id: UUID, plan_id: UUID) -> list[Meal]:
        """Return the meals of a client's plan."""
        plan = self.get_plan(client_id, plan_id)
        return self.repository.list_plan_meals(plan.id)

    def create_standalone_meal(
        self, coach_id: UUID, payload: dict[str, object]
    ) -> Meal:
        """Add a meal to the coach's meal collection."""
        return self.repository.create_meal(
            {
                "coach_id": str(coach_id),
                "name": _required_name(payload, "Meal"),
                "description": _text(payload, "description"),
                "instructions": _text(payload, "instructions"),
            }
        )

    def list_standalone_meals(self, coach_id: UUID) -> list[Meal]:
        """Return the coach's standalone meals, sorted by name."""
        meals = self.repository.list_coach_meals(coach_id)
        return sorted(meals, key=lambda meal: meal.name.lower())

    def targets_for(self, plan: NutritionPlan) -> MacroTargets | None:
        """Return the daily targets a plan prescribes, if any.

        Macros-by-meal plans add up their meals; calories follow from the
        summed grams. Meal plans have no numeric targets.
        """
        if plan.plan_type is PlanType.TOTAL_MACROS:
            return plan.targets
        if plan.plan_type is PlanType.MEAL_PLAN:
            return None
        meals = self.repository.list_plan_meals(plan.id)
        protein = sum(meal.protein for meal in meals)
        carbs = sum(meal.carbs for meal in meals)
        fats = sum(meal.fats for meal in meals)
        return MacroTargets(
            calories=int(calculate_calories(protein, carbs, fats)),
            protein=protein,
            carbs=carbs,
            fats=fats,
        )

    def _update(self, plan_id: UUID, changes: dict[str, object]) -> NutritionPlan:
        if not changes:
            plan = self.repository.get_plan(plan_id)
        else:
            plan = self.repository.update_plan(plan_id, changes)
        if plan is None:
            raise NotFoundError(f"Plan {plan_id} not found")
        return plan


def parse_target(value: object) -> int:
    """Return a whole-number target; blank or unparseable values become 0."""
    target = math.trunc(parse_macro(value))  # type: ignore[arg-type]
    if target < 0:
        raise ValidationError("Targets must not be negative")
    return target


def target_progress(targets: MacroTargets, actual: MacroTotals) -> TargetProgress:
    """Return how much of each target the actual intake reaches."""

    def _pct(consumed: float, target: int) -> int:
        if target <= 0:
            return 0
        return math.floor(consumed / target * 100 + 0.5)

    return TargetProgress(
        calories_pct=_pct(actual.calories, targets.calories),
        protein_pct=_pct(actual.protein, targets.protein),
        carbs_pct=_pct(actual.carbs, targets.carbs),
        fats_pct=_pct(actual.fats, targets.fats),
    )


def _required_name(payload: dict[str, object], kind: str) -> str:
    name = str(payload.get("name") or "").strip()
    if not name:
        raise ValidationError(f"{kind} name is required")
    return name


def _text(payload: dict[str, object], key: str) -> str:
    return str(payload.get(key) or "").strip()
