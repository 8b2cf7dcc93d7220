"""Shared test fixtures."""

import random
from collections.abc import Iterable
from dataclasses import dataclass, field

import pytest

from recipe_swiper.config import Settings
from recipe_swiper.containers import AppContainer
from recipe_swiper.domain.recipes import MealType, Recipe, TasteProfile
from recipe_swiper.services.catalog import CatalogService, RecipeStore
from recipe_swiper.services.dietary import DietaryTagRepository, TagDietaryFilter
from recipe_swiper.services.session_store import InMemorySessionStore
from recipe_swiper.services.sessions import SwipeSessionService


def make_recipe(  # noqa: PLR0913
    recipe_id: str,
    ingredients: Iterable[str],
    meal_type: MealType = MealType.DINNER,
    taste_profile: TasteProfile = TasteProfile.SAVORY,
    appliance: str = "stovetop",
    cook_time_minutes: int = 20,
    main_ingredient: str | None = None,
    dietary_tags: tuple[str, ...] = (),
) -> Recipe:
    """Build a recipe; the first ingredient is the main one by default."""
    names = list(ingredients)
    main = main_ingredient if main_ingredient is not None else names[0]
    return Recipe(
        id=recipe_id,
        title=f"{main} {taste_profile.value} {meal_type.value}",
        meal_type=meal_type,
        taste_profile=taste_profile,
        cook_time_minutes=cook_time_minutes,
        appliance=appliance,
        main_ingredient=main,
        ingredients=frozenset(names),
        dietary_tags=dietary_tags,
    )


def scenario_recipes() -> list[Recipe]:
    """R1 = egg, spinach, cheese; R2 = egg, spinach, tomato."""
    return [
        make_recipe("r1", ["egg", "spinach", "cheese"]),
        make_recipe("r2", ["egg", "spinach", "tomato"]),
    ]


@dataclass
class InMemoryRecipeStore(RecipeStore):
    """In-memory recipe store for tests."""

    recipes: list[Recipe] = field(default_factory=list)
    load_calls: int = 0
    fail: bool = False

    def load_all_recipes(self) -> list[Recipe]:
        self.load_calls += 1
        if self.fail:
            raise RuntimeError("store unreachable")
        return list(self.recipes)


@dataclass
class InMemoryDietaryTagRepository(DietaryTagRepository):
    """In-memory dietary tag repository for tests."""

    tags: dict[str, list[str]] = field(default_factory=dict)
    fail: bool = False

    def load_dietary_tags(self) -> dict[str, list[str]]:
        if self.fail:
            raise RuntimeError("tags unavailable")
        return dict(self.tags)


class FailingDietaryFilter:
    """Dietary filter whose lookups always fail."""

    def is_allowed(self, ingredient: str, restrictions: Iterable[str]) -> bool:
        raise RuntimeError("dietary lookup failed")


def build_session_service(
    recipes: list[Recipe] | None = None,
    dietary_filter: object | None = None,
    seed: int = 0,
    **overrides: object,
) -> SwipeSessionService:
    """Build a session service over an in-memory catalog."""
    store = InMemoryRecipeStore(
        recipes=scenario_recipes() if recipes is None else recipes
    )
    return SwipeSessionService(
        catalog_service=CatalogService(store=store),
        store=InMemorySessionStore(),
        dietary_filter=dietary_filter or TagDietaryFilter(),
        rng=random.Random(seed),
        **overrides,
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        admin_token="admin-token",
    )


@pytest.fixture
def recipe_store() -> InMemoryRecipeStore:
    return InMemoryRecipeStore(recipes=scenario_recipes())


@pytest.fixture
def dietary_tag_repository() -> InMemoryDietaryTagRepository:
    return InMemoryDietaryTagRepository(
        tags={"Cheese": ["Contains Dairy"], "Eggs": ["Contains Eggs"]}
    )


@pytest.fixture
def container(
    settings: Settings,
    recipe_store: InMemoryRecipeStore,
    dietary_tag_repository: InMemoryDietaryTagRepository,
) -> AppContainer:
    catalog_service = CatalogService(store=recipe_store)
    dietary_filter = TagDietaryFilter(repository=dietary_tag_repository)
    session_service = SwipeSessionService(
        catalog_service=catalog_service,
        store=InMemorySessionStore(ttl_seconds=settings.session_ttl_seconds),
        dietary_filter=dietary_filter,
        rng=random.Random(0),
        broad_stage_threshold=settings.broad_stage_threshold,
        top_k=settings.suggestion_top_k,
        low_pool_threshold=settings.low_pool_threshold,
        cook_time_grace_minutes=settings.cook_time_grace_minutes,
    )
    return AppContainer(
        settings=settings,
        catalog_service=catalog_service,
        dietary_filter=dietary_filter,
        session_service=session_service,
    )
