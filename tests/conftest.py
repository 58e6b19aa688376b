"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, date, datetime

import pytest

from diet_tracker.config import Settings
from diet_tracker.containers import AppContainer
from diet_tracker.domain.dishes import Dish
from diet_tracker.domain.foods import BaseUnit, Food, FoodCategory, FoodUnit
from diet_tracker.domain.meals import DailyMeals, daily_meals_key
from diet_tracker.domain.models import AuthUser
from diet_tracker.domain.nutrition import NutritionalValues
from diet_tracker.domain.profiles import Profile
from diet_tracker.services.dishes import DishRepository, DishService
from diet_tracker.services.foods import FoodCatalogService, FoodRepository
from diet_tracker.services.history import HistoryService
from diet_tracker.services.meals import DailyMealsRepository, MealLogService
from diet_tracker.services.profiles import ProfileRepository, ProfileService
from diet_tracker.services.seed import CatalogSeeder
from diet_tracker.services.users import IdentityProvider, IdentityService

TIMEZONE = "America/Sao_Paulo"
# 2024-03-15 12:00 in São Paulo, a Friday
NOW = datetime(2024, 3, 15, 15, 0, tzinfo=UTC)
TODAY = date(2024, 3, 15)
USER_ID = "user-1"
OTHER_USER_ID = "user-2"
TOKEN = "valid-token"
OTHER_TOKEN = "other-token"


def fixed_clock() -> datetime:
    return NOW


def make_food(  # noqa: PLR0913
    food_id: str = "chicken",
    name: str = "Grilled Chicken Breast",
    nutrition: NutritionalValues | None = None,
    units: list[FoodUnit] | None = None,
    default_unit: str = "g",
    *,
    is_custom: bool = False,
    is_public: bool = True,
    user_id: str | None = None,
    category: FoodCategory = FoodCategory.PROTEIN,
    brand: str | None = None,
) -> Food:
    return Food(
        id=food_id,
        name=name,
        category=category,
        nutrition=nutrition
        or NutritionalValues(
            calories=165, protein=31, carbs=0, fat=3.6, fiber=0, sodium=74, sugar=0
        ),
        base_unit=BaseUnit.GRAM,
        available_units=units or [FoodUnit("gram", "g", 1)],
        default_unit=default_unit,
        is_custom=is_custom,
        is_public=is_public,
        user_id=user_id,
        brand=brand,
    )


def make_rice() -> Food:
    return make_food(
        "rice",
        "Cooked White Rice",
        NutritionalValues(
            calories=130, protein=2.7, carbs=28, fat=0.3, fiber=0.4, sodium=1, sugar=0.1
        ),
        category=FoodCategory.CARBS,
    )


def make_milk() -> Food:
    return Food(
        id="milk",
        name="Whole Milk",
        category=FoodCategory.DAIRY,
        nutrition=NutritionalValues(
            calories=61,
            protein=3.2,
            carbs=4.5,
            fat=3.2,
            fiber=0,
            sodium=44,
            sugar=4.5,
            water=87,
        ),
        base_unit=BaseUnit.MILLILITER,
        available_units=[FoodUnit("cup", "cup", 200), FoodUnit("milliliter", "ml", 1)],
        default_unit="cup",
        is_custom=False,
        is_public=True,
    )


@dataclass
class InMemoryFoodRepository(FoodRepository):
    """In-memory food repository for tests."""

    foods: dict[str, Food] = field(default_factory=dict)
    deleted: list[str] = field(default_factory=list)

    def save_food(self, food: Food) -> None:
        self.foods[food.id] = food

    def get_food(self, food_id: str) -> Food | None:
        return self.foods.get(food_id)

    def list_default_foods(self) -> list[Food]:
        return [food for food in self.foods.values() if not food.is_custom]

    def list_user_foods(self, user_id: str) -> list[Food]:
        return [
            food
            for food in self.foods.values()
            if food.is_custom and food.user_id == user_id
        ]

    def list_public_foods(self) -> list[Food]:
        return [
            food for food in self.foods.values() if food.is_custom and food.is_public
        ]

    def delete_food(self, food_id: str) -> None:
        self.deleted.append(food_id)
        self.foods.pop(food_id, None)


@dataclass
class InMemoryDishRepository(DishRepository):
    """In-memory dish repository for tests."""

    dishes: dict[str, Dish] = field(default_factory=dict)

    def save_dish(self, dish: Dish) -> None:
        self.dishes[dish.id] = dish

    def get_dish(self, dish_id: str) -> Dish | None:
        return self.dishes.get(dish_id)

    def list_user_dishes(self, user_id: str) -> list[Dish]:
        return [dish for dish in self.dishes.values() if dish.user_id == user_id]

    def list_public_dishes(self) -> list[Dish]:
        return [dish for dish in self.dishes.values() if dish.is_public]

    def delete_dish(self, dish_id: str) -> None:
        self.dishes.pop(dish_id, None)


@dataclass
class InMemoryDailyMealsRepository(DailyMealsRepository):
    """In-memory daily meals repository for tests."""

    days: dict[str, DailyMeals] = field(default_factory=dict)
    saves: int = 0

    def get_daily_meals(self, user_id: str, day: date) -> DailyMeals | None:
        return self.days.get(daily_meals_key(user_id, day))

    def save_daily_meals(self, daily: DailyMeals) -> None:
        self.saves += 1
        self.days[daily.key] = daily

    def list_daily_meals(
        self, user_id: str, start: date, end: date
    ) -> list[DailyMeals]:
        return sorted(
            (
                daily
                for daily in self.days.values()
                if daily.user_id == user_id and start <= daily.date <= end
            ),
            key=lambda daily: daily.date,
        )


@dataclass
class InMemoryProfileRepository(ProfileRepository):
    """In-memory profile repository for tests."""

    profiles: dict[str, Profile] = field(default_factory=dict)

    def get_profile(self, user_id: str) -> Profile | None:
        return self.profiles.get(user_id)

    def save_profile(self, profile: Profile) -> None:
        self.profiles[profile.user_id] = profile


@dataclass
class FakeIdentityProvider(IdentityProvider):
    """Identity provider accepting a fixed set of tokens."""

    users: dict[str, AuthUser] = field(
        default_factory=lambda: {
            TOKEN: AuthUser(id=USER_ID, email="ana@example.com", display_name="Ana"),
            OTHER_TOKEN: AuthUser(id=OTHER_USER_ID, email=None, display_name=None),
        }
    )

    def get_user(self, access_token: str) -> AuthUser | None:
        return self.users.get(access_token)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="test.service.key",
        reference_timezone=TIMEZONE,
        seed_default_foods=False,
    )


@pytest.fixture
def food_repository() -> InMemoryFoodRepository:
    repository = InMemoryFoodRepository()
    for food in (make_food(), make_rice(), make_milk()):
        repository.save_food(food)
    return repository


@pytest.fixture
def food_service(food_repository: InMemoryFoodRepository) -> FoodCatalogService:
    return FoodCatalogService(food_repository, clock=fixed_clock)


@pytest.fixture
def dish_service(food_service: FoodCatalogService) -> DishService:
    return DishService(InMemoryDishRepository(), food_service, clock=fixed_clock)


@pytest.fixture
def daily_meals_repository() -> InMemoryDailyMealsRepository:
    return InMemoryDailyMealsRepository()


@pytest.fixture
def meal_log_service(
    daily_meals_repository: InMemoryDailyMealsRepository,
    food_service: FoodCatalogService,
    dish_service: DishService,
) -> MealLogService:
    return MealLogService(
        repository=daily_meals_repository,
        food_service=food_service,
        dish_service=dish_service,
        timezone_name=TIMEZONE,
        clock=fixed_clock,
    )


@pytest.fixture
def profile_service() -> ProfileService:
    return ProfileService(InMemoryProfileRepository(), clock=fixed_clock)


@pytest.fixture
def history_service(
    daily_meals_repository: InMemoryDailyMealsRepository,
    profile_service: ProfileService,
) -> HistoryService:
    return HistoryService(
        repository=daily_meals_repository,
        profile_service=profile_service,
        timezone_name=TIMEZONE,
        clock=fixed_clock,
    )


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    food_repository: InMemoryFoodRepository,
    food_service: FoodCatalogService,
    dish_service: DishService,
    meal_log_service: MealLogService,
    profile_service: ProfileService,
    history_service: HistoryService,
) -> AppContainer:
    return AppContainer(
        settings=settings,
        identity_service=IdentityService(FakeIdentityProvider()),
        food_service=food_service,
        dish_service=dish_service,
        meal_log_service=meal_log_service,
        profile_service=profile_service,
        history_service=history_service,
        catalog_seeder=CatalogSeeder(food_repository, clock=fixed_clock),
    )
