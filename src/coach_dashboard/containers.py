"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from coach_dashboard.adapters.supabase_client_repository import (
    SupabaseClientRepository,
)
from coach_dashboard.adapters.supabase_food_entry_repository import (
    SupabaseFoodEntryRepository,
)
from coach_dashboard.adapters.supabase_food_library_repository import (
    SupabaseFoodLibraryRepository,
)
from coach_dashboard.adapters.supabase_plan_repository import SupabasePlanRepository
from coach_dashboard.config import Settings
from coach_dashboard.services.clients import ClientService
from coach_dashboard.services.entries import FoodLogService
from coach_dashboard.services.library import FoodLibraryService
from coach_dashboard.services.plans import PlanService
from coach_dashboard.services.stats import NutritionStatsService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    client_service: ClientService
    food_library_service: FoodLibraryService
    food_log_service: FoodLogService
    nutrition_stats_service: NutritionStatsService
    plan_service: PlanService


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    entry_repository = SupabaseFoodEntryRepository(supabase_client)
    food_library_service = FoodLibraryService(
        SupabaseFoodLibraryRepository(supabase_client)
    )
    return AppContainer(
        settings=resolved_settings,
        client_service=ClientService(SupabaseClientRepository(supabase_client)),
        food_library_service=food_library_service,
        food_log_service=FoodLogService(
            repository=entry_repository,
            library_service=food_library_service,
        ),
        nutrition_stats_service=NutritionStatsService(
            repository=entry_repository,
            missing_day_policy=resolved_settings.missing_day_policy,
        ),
        plan_service=PlanService(SupabasePlanRepository(supabase_client)),
    )
