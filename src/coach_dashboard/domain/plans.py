"""Domain models for client nutrition plans and coach meals."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from uuid import UUID


class PlanType(str, Enum):
    """How a plan prescribes nutrition."""

    MEAL_PLAN = "mealPlan"
    TOTAL_MACROS = "totalMacros"
    MACROS_BY_MEAL = "macrosByMeal"


@dataclass(frozen=True)
class MacroTargets:
    """Daily macro targets in whole calories and grams."""

    calories: int = 0
    protein: int = 0
    carbs: int = 0
    fats: int = 0


@dataclass(frozen=True)
class NutritionPlan:
    """A plan assigned to a client."""

    id: UUID
    client_id: UUID
    name: str
    description: str
    plan_type: PlanType
    targets: MacroTargets | None
    created_at: datetime | None


@dataclass(frozen=True)
class Meal:
    """A meal inside a plan, or a standalone meal in a coach's collection.

    Plan meals carry ``plan_id``; standalone meals carry ``coach_id``.
    Macro fields are only used by macros-by-meal plans.
    """

    id: UUID
    name: str
    plan_id: UUID | None = None
    coach_id: UUID | None = None
    description: str = ""
    instructions: str = ""
    notes: str = ""
    protein: int = 0
    carbs: int = 0
    fats: int = 0
    created_at: datetime | None = None


@dataclass(frozen=True)
class TargetProgress:
    """Share of each daily target reached, in whole percent."""

    calories_pct: int
    protein_pct: int
    carbs_pct: int
    fats_pct: int
