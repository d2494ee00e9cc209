"""Pydantic models for API request payloads."""

from datetime import date, datetime
from uuid import UUID

from pydantic import BaseModel, Field

NumberLike = float | str | None


class ClientCreate(BaseModel):
    """Payload for adding a client to the roster."""

    name: str
    email: str
    tag: str | None = None
    goal: str | None = None
    current_weight: float | None = None
    goal_weight: float | None = None


class ClientUpdate(BaseModel):
    """Partial update of a client."""

    name: str | None = None
    email: str | None = None
    tag: str | None = None
    goal: str | None = None
    current_weight: float | None = None
    goal_weight: float | None = None
    duration: str | None = None
    last_checkin_at: datetime | None = None


class FoodEntryCreate(BaseModel):
    """Payload for logging a food entry."""

    name: str
    calories: NumberLike = None
    protein: NumberLike = None
    carbs: NumberLike = None
    fats: NumberLike = None
    day: date | None = None


class LibraryEntryCreate(BaseModel):
    """Payload for logging a food from the coach library."""

    food_id: UUID
    servings: float = Field(default=1.0, gt=0)
    day: date | None = None


class LibraryFoodCreate(BaseModel):
    """Payload for adding a food to the coach library."""

    name: str
    serving_size: NumberLike = None
    serving_unit: str = "grams"
    protein: NumberLike = None
    carbs: NumberLike = None
    fats: NumberLike = None
    notes: str | None = None


class PlanCreate(BaseModel):
    """Payload for creating a client nutrition plan."""

    name: str
    description: str | None = None
    plan_type: str = "mealPlan"


class PlanUpdate(BaseModel):
    """Rename a plan or change its description."""

    name: str | None = None
    description: str | None = None


class MacroTargetsUpdate(BaseModel):
    """Daily targets for a total-macros plan."""

    calories: NumberLike = None
    protein: NumberLike = None
    carbs: NumberLike = None
    fats: NumberLike = None


class MealCreate(BaseModel):
    """A meal for a plan or for the coach's meal collection."""

    name: str
    description: str | None = None
    instructions: str | None = None
    notes: str | None = None
    protein: NumberLike = None
    carbs: NumberLike = None
    fats: NumberLike = None
