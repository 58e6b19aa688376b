"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from diet_tracker.adapters.supabase_daily_meals_repository import (
    SupabaseDailyMealsRepository,
)
from diet_tracker.adapters.supabase_dish_repository import SupabaseDishRepository
from diet_tracker.adapters.supabase_food_repository import SupabaseFoodRepository
from diet_tracker.adapters.supabase_identity_provider import (
    SupabaseIdentityProvider,
)
from diet_tracker.adapters.supabase_profile_repository import (
    SupabaseProfileRepository,
)
from diet_tracker.config import Settings
from diet_tracker.services.dishes import DishService
from diet_tracker.services.foods import FoodCatalogService
from diet_tracker.services.history import HistoryService
from diet_tracker.services.meals import MealLogService
from diet_tracker.services.profiles import ProfileService
from diet_tracker.services.seed import CatalogSeeder
from diet_tracker.services.users import IdentityService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    identity_service: IdentityService
    food_service: FoodCatalogService
    dish_service: DishService
    meal_log_service: MealLogService
    profile_service: ProfileService
    history_service: HistoryService
    catalog_seeder: CatalogSeeder


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    food_repository = SupabaseFoodRepository(supabase_client)
    dish_repository = SupabaseDishRepository(supabase_client)
    daily_meals_repository = SupabaseDailyMealsRepository(supabase_client)
    profile_repository = SupabaseProfileRepository(supabase_client)
    timezone_name = resolved_settings.reference_timezone

    food_service = FoodCatalogService(food_repository)
    dish_service = DishService(dish_repository, food_service)
    meal_log_service = MealLogService(
        repository=daily_meals_repository,
        food_service=food_service,
        dish_service=dish_service,
        timezone_name=timezone_name,
    )
    profile_service = ProfileService(profile_repository)
    history_service = HistoryService(
        repository=daily_meals_repository,
        profile_service=profile_service,
        timezone_name=timezone_name,
        max_days=resolved_settings.history_max_days,
    )

    return AppContainer(
        settings=resolved_settings,
        identity_service=IdentityService(SupabaseIdentityProvider(supabase_client)),
        food_service=food_service,
        dish_service=dish_service,
        meal_log_service=meal_log_service,
        profile_service=profile_service,
        history_service=history_service,
        catalog_seeder=CatalogSeeder(food_repository),
    )
