"""Shared test fixtures."""

from dataclasses import dataclass, field, replace
from datetime import UTC, datetime
from uuid import UUID, uuid4

import pytest

from coach_dashboard.config import Settings
from coach_dashboard.containers import AppContainer
from coach_dashboard.domain.clients import ClientRecord
from coach_dashboard.domain.library import LibraryFood
from coach_dashboard.domain.nutrition import FoodEntry
from coach_dashboard.domain.plans import MacroTargets, Meal, NutritionPlan, PlanType
from coach_dashboard.services.clients import ClientRepository, ClientService
from coach_dashboard.services.entries import FoodEntryRepository, FoodLogService
from coach_dashboard.services.library import FoodLibraryRepository, FoodLibraryService
from coach_dashboard.services.plans import PlanRepository, PlanService
from coach_dashboard.services.stats import NutritionStatsService


@dataclass
class InMemoryFoodEntryRepository(FoodEntryRepository):
    """In-memory food entry repository for tests."""

    entries: list[FoodEntry] = field(default_factory=list)
    failing_days: set[str] = field(default_factory=set)
    calls: list[str] = field(default_factory=list)

    def add(self, client_id: UUID, day_key: str, **fields: object) -> FoodEntry:
        entry = FoodEntry(
            id=uuid4(),
            client_id=client_id,
            day_key=day_key,
            name=str(fields.pop("name", "food")),
            timestamp=datetime.now(tz=UTC),
            **fields,  # type: ignore[arg-type]
        )
        self.entries.append(entry)
        return entry

    def list_entries_for_day(self, client_id: UUID, day_key: str) -> list[FoodEntry]:
        self.calls.append(day_key)
        if day_key in self.failing_days:
            raise ConnectionError(f"fetch failed for {day_key}")
        return [
            entry
            for entry in self.entries
            if entry.client_id == client_id and entry.day_key == day_key
        ]

    def create_entry(
        self, client_id: UUID, day_key: str, payload: dict[str, object]
    ) -> FoodEntry:
        timestamp = payload.get("timestamp")
        entry = FoodEntry(
            id=uuid4(),
            client_id=client_id,
            day_key=day_key,
            name=str(payload["name"]),
            calories=payload.get("calories"),  # type: ignore[arg-type]
            protein=payload.get("protein"),  # type: ignore[arg-type]
            carbs=payload.get("carbs"),  # type: ignore[arg-type]
            fats=payload.get("fats"),  # type: ignore[arg-type]
            timestamp=datetime.fromisoformat(timestamp)
            if isinstance(timestamp, str)
            else None,
        )
        self.entries.append(entry)
        return entry


@dataclass
class InMemoryFoodLibraryRepository(FoodLibraryRepository):
    """In-memory food library repository for tests."""

    foods: dict[UUID, LibraryFood] = field(default_factory=dict)

    def create_food(self, coach_id: UUID, payload: dict[str, object]) -> LibraryFood:
        food = LibraryFood(
            id=uuid4(),
            coach_id=coach_id,
            name=str(payload["name"]),
            serving_size=float(payload.get("serving_size", 1.0)),  # type: ignore[arg-type]
            serving_unit=str(payload.get("serving_unit", "grams")),
            calories=float(payload.get("calories", 0.0)),  # type: ignore[arg-type]
            protein=float(payload.get("protein", 0.0)),  # type: ignore[arg-type]
            carbs=float(payload.get("carbs", 0.0)),  # type: ignore[arg-type]
            fats=float(payload.get("fats", 0.0)),  # type: ignore[arg-type]
            notes=str(payload.get("notes", "")),
            created_at=datetime.now(tz=UTC),
        )
        self.foods[food.id] = food
        return food

    def get_food(self, food_id: UUID) -> LibraryFood | None:
        return self.foods.get(food_id)

    def list_foods(self, coach_id: UUID) -> list[LibraryFood]:
        return [food for food in self.foods.values() if food.coach_id == coach_id]


@dataclass
class InMemoryClientRepository(ClientRepository):
    """In-memory client roster repository for tests."""

    clients: dict[UUID, ClientRecord] = field(default_factory=dict)

    def create_client(self, payload: dict[str, object]) -> ClientRecord:
        now = datetime.now(tz=UTC)
        client = ClientRecord(
            id=uuid4(),
            name=str(payload["name"]),
            email=str(payload["email"]),
            tag=payload.get("tag"),  # type: ignore[arg-type]
            goal=payload.get("goal"),  # type: ignore[arg-type]
            current_weight=payload.get("current_weight"),  # type: ignore[arg-type]
            goal_weight=payload.get("goal_weight"),  # type: ignore[arg-type]
            duration=payload.get("duration"),  # type: ignore[arg-type]
            last_active_at=now,
            last_checkin_at=None,
            created_at=now,
            updated_at=now,
        )
        self.clients[client.id] = client
        return client

    def update_client(
        self, client_id: UUID, payload: dict[str, object]
    ) -> ClientRecord | None:
        current = self.clients.get(client_id)
        if current is None:
            return None
        changes = dict(payload)
        if isinstance(changes.get("last_checkin_at"), str):
            changes["last_checkin_at"] = datetime.fromisoformat(
                changes["last_checkin_at"]  # type: ignore[arg-type]
            )
        updated = replace(current, **changes, updated_at=datetime.now(tz=UTC))
        self.clients[client_id] = updated
        return updated

    def get_client(self, client_id: UUID) -> ClientRecord | None:
        return self.clients.get(client_id)

    def list_clients(self) -> list[ClientRecord]:
        return list(self.clients.values())


@dataclass
class InMemoryPlanRepository(PlanRepository):
    """In-memory plan and meal repository for tests."""

    plans: dict[UUID, NutritionPlan] = field(default_factory=dict)
    meals: list[Meal] = field(default_factory=list)

    def create_plan(self, client_id: UUID, payload: dict[str, object]) -> NutritionPlan:
        plan = NutritionPlan(
            id=uuid4(),
            client_id=client_id,
            name=str(payload["name"]),
            description=str(payload.get("description", "")),
            plan_type=PlanType(payload["plan_type"]),
            targets=None,
            created_at=datetime.now(tz=UTC),
        )
        self.plans[plan.id] = plan
        return plan

    def get_plan(self, plan_id: UUID) -> NutritionPlan | None:
        return self.plans.get(plan_id)

    def list_plans(self, client_id: UUID) -> list[NutritionPlan]:
        return [plan for plan in self.plans.values() if plan.client_id == client_id]

    def update_plan(
        self, plan_id: UUID, payload: dict[str, object]
    ) -> NutritionPlan | None:
        current = self.plans.get(plan_id)
        if current is None:
            return None
        changes = dict(payload)
        macros = changes.pop("macros", None)
        if isinstance(macros, dict):
            changes["targets"] = MacroTargets(**macros)
        updated = replace(current, **changes)
        self.plans[plan_id] = updated
        return updated

    def create_meal(self, payload: dict[str, object]) -> Meal:
        fields = dict(payload)
        for key in ("plan_id", "coach_id"):
            if key in fields:
                fields[key] = UUID(str(fields[key]))
        meal = Meal(
            id=uuid4(),
            created_at=datetime.now(tz=UTC),
            **fields,  # type: ignore[arg-type]
        )
        self.meals.append(meal)
        return meal

    def list_plan_meals(self, plan_id: UUID) -> list[Meal]:
        return [meal for meal in self.meals if meal.plan_id == plan_id]

    def list_coach_meals(self, coach_id: UUID) -> list[Meal]:
        return [meal for meal in self.meals if meal.coach_id == coach_id]


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key=(
            "eyJhbGciOiJIUzI1NiIsInR5cCI6IkpXVCJ9"
            ".eyJyb2xlIjoic2VydmljZV9yb2xlIn0"
            ".c2lnbmF0dXJl"
        ),
    )


@pytest.fixture
def entry_repository() -> InMemoryFoodEntryRepository:
    return InMemoryFoodEntryRepository()


@pytest.fixture
def library_repository() -> InMemoryFoodLibraryRepository:
    return InMemoryFoodLibraryRepository()


@pytest.fixture
def client_repository() -> InMemoryClientRepository:
    return InMemoryClientRepository()


@pytest.fixture
def plan_repository() -> InMemoryPlanRepository:
    return InMemoryPlanRepository()


@pytest.fixture
def container(
    settings: Settings,
    entry_repository: InMemoryFoodEntryRepository,
    library_repository: InMemoryFoodLibraryRepository,
    client_repository: InMemoryClientRepository,
    plan_repository: InMemoryPlanRepository,
) -> AppContainer:
    food_library_service = FoodLibraryService(library_repository)
    return AppContainer(
        settings=settings,
        client_service=ClientService(client_repository),
        food_library_service=food_library_service,
        food_log_service=FoodLogService(
            repository=entry_repository,
            library_service=food_library_service,
        ),
        nutrition_stats_service=NutritionStatsService(
            repository=entry_repository,
            missing_day_policy=settings.missing_day_policy,
        ),
        plan_service=PlanService(plan_repository),
    )
