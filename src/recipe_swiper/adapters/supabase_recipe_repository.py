"""Supabase-backed recipe store."""

import logging
from dataclasses import dataclass

from supabase import Client

from recipe_swiper.adapters.supabase_rows import parse_text_array
from recipe_swiper.domain.recipes import MealType, Recipe, TasteProfile
from recipe_swiper.services.catalog import RecipeStore

_logger = logging.getLogger(__name__)

_COLUMNS = (
    "id, meal_type, main_ingredient, supporting_ingredients, taste_profile, "
    "dietary_tags, cook_time, appliance"
)


@dataclass
class SupabaseRecipeRepository(RecipeStore):
    """Reads recipe combinations from Supabase."""

    client: Client
    page_size: int = 1000

    def load_all_recipes(self) -> list[Recipe]:
        """Return every recipe row, reading the table page by page."""
        recipes: list[Recipe] = []
        start = 0
        while True:
            response = (
                self.client.table("recipe_combinations")
                .select(_COLUMNS)
                .order("id")
                .range(start, start + self.page_size - 1)
                .execute()
            )
            if response.data is None:
                raise RuntimeError("Failed to load recipe combinations")
            for row in response.data:
                recipe = _parse_recipe(row)
                if recipe is not None:
                    recipes.append(recipe)
            if len(response.data) < self.page_size:
                return recipes
            start += self.page_size


def _parse_recipe(row: dict[str, object]) -> Recipe | None:
    """Parse a recipe row, skipping rows with unknown enum values."""
    try:
        meal_type = MealType(str(row.get("meal_type", "")).strip().lower())
        taste_profile = TasteProfile(str(row.get("taste_profile", "")).strip().lower())
    except ValueError:
        _logger.warning("Skipping recipe row with unknown type: id=%s", row.get("id"))
        return None
    main_ingredient = str(row.get("main_ingredient") or "").strip()
    supporting = parse_text_array(row.get("supporting_ingredients"))
    return Recipe(
        id=str(row["id"]),
        title=f"{main_ingredient} {taste_profile.value} {meal_type.value}".strip(),
        meal_type=meal_type,
        taste_profile=taste_profile,
        cook_time_minutes=int(row.get("cook_time") or 0),
        appliance=str(row.get("appliance") or "").strip().lower(),
        main_ingredient=main_ingredient,
        ingredients=frozenset([main_ingredient, *supporting]),
        dietary_tags=tuple(parse_text_array(row.get("dietary_tags"))),
    )
