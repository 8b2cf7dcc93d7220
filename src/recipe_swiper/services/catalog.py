"""Recipe catalog loaded from the recipe store."""

import logging
from collections import Counter
from dataclasses import dataclass, field, replace
from datetime import UTC, datetime, timedelta
from typing import Protocol

from recipe_swiper.domain.recipes import MealType, Preferences, Recipe, TasteProfile
from recipe_swiper.services.normalizer import normalize

_logger = logging.getLogger(__name__)


class RecipeStore(Protocol):
    """Read-only source of recipe records."""

    def load_all_recipes(self) -> list[Recipe]:
        """Return every stored recipe."""


@dataclass(frozen=True)
class RecipeCatalog:
    """Immutable set of recipes with canonical ingredient names."""

    recipes: frozenset[Recipe] = frozenset()

    @classmethod
    def load(cls, store: RecipeStore) -> "RecipeCatalog":
        """Load and canonicalize every recipe from the store.

        Records without ingredients, with a non-positive cook time or with a
        duplicate id are skipped. An empty store gives an empty catalog.
        """
        recipes: list[Recipe] = []
        seen_ids: set[str] = set()
        for record in store.load_all_recipes():
            recipe = _canonicalize(record)
            if recipe is None:
                _logger.warning("Skipping invalid recipe record: id=%s", record.id)
                continue
            if recipe.id in seen_ids:
                _logger.warning("Skipping duplicate recipe id=%s", recipe.id)
                continue
            seen_ids.add(recipe.id)
            recipes.append(recipe)
        _logger.info("Loaded recipe catalog: recipes=%s", len(recipes))
        return cls(frozenset(recipes))

    def __len__(self) -> int:
        return len(self.recipes)

    def all(self) -> frozenset[Recipe]:
        """Return every recipe in the catalog."""
        return self.recipes

    def filter_by_preferences(
        self,
        meal_type: MealType | None = None,
        taste_profile: TasteProfile | None = None,
        max_cook_time: int | None = None,
        cook_time_grace_minutes: int = 0,
    ) -> frozenset[Recipe]:
        """Return recipes matching the given filters; None means no filter."""
        return frozenset(
            recipe
            for recipe in self.recipes
            if (meal_type is None or recipe.meal_type == meal_type)
            and (taste_profile is None or recipe.taste_profile == taste_profile)
            and (
                max_cook_time is None
                or recipe.cook_time_minutes <= max_cook_time + cook_time_grace_minutes
            )
        )

    def seed(
        self, preferences: Preferences, cook_time_grace_minutes: int = 0
    ) -> frozenset[Recipe]:
        """Return the starting candidate pool for a set of preferences."""
        return self.filter_by_preferences(
            meal_type=preferences.meal_type,
            taste_profile=preferences.taste_profile,
            max_cook_time=preferences.max_cook_time,
            cook_time_grace_minutes=cook_time_grace_minutes,
        )

    def count_by_meal_type(self) -> dict[str, int]:
        """Return the number of recipes per meal type."""
        counts = Counter(recipe.meal_type.value for recipe in self.recipes)
        return {meal_type.value: counts.get(meal_type.value, 0) for meal_type in MealType}


def _canonicalize(record: Recipe) -> Recipe | None:
    main_ingredient = normalize(record.main_ingredient)
    names = {normalize(name) for name in record.ingredients}
    if main_ingredient:
        names.add(main_ingredient)
    names.discard("")
    if not names or record.cook_time_minutes <= 0:
        return None
    return replace(
        record, main_ingredient=main_ingredient, ingredients=frozenset(names)
    )


@dataclass
class CatalogService:
    """Owns the current catalog and reloads it on an interval."""

    store: RecipeStore
    refresh_seconds: int = 0
    _catalog: RecipeCatalog = field(default_factory=RecipeCatalog, init=False)
    _loaded_at: datetime | None = field(default=None, init=False)

    def current(self) -> RecipeCatalog:
        """Return the catalog, reloading it first when it is stale."""
        if self._loaded_at is None or self._is_stale():
            self.refresh()
        return self._catalog

    def refresh(self) -> RecipeCatalog:
        """Reload from the store, keeping the previous catalog on failure.

        A failed load is retried on the next ``current()`` call.
        """
        try:
            catalog = RecipeCatalog.load(self.store)
        except Exception:
            _logger.exception(
                "Failed to load recipe catalog; keeping %s recipes",
                len(self._catalog),
            )
            self._loaded_at = None
        else:
            self._catalog = catalog
            self._loaded_at = datetime.now(tz=UTC)
        return self._catalog

    def _is_stale(self) -> bool:
        if self.refresh_seconds <= 0 or self._loaded_at is None:
            return False
        age = datetime.now(tz=UTC) - self._loaded_at
        return age >= timedelta(seconds=self.refresh_seconds)
