"""Domain models for the recipe catalog."""

from dataclasses import dataclass, field
from enum import Enum


class MealType(Enum):
    """Meal a recipe is meant for."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"


class TasteProfile(Enum):
    """Overall taste of a recipe."""

    SWEET = "sweet"
    SAVORY = "savory"


@dataclass(frozen=True)
class Recipe:
    """Immutable recipe record with canonical ingredient names."""

    id: str
    title: str
    meal_type: MealType
    taste_profile: TasteProfile
    cook_time_minutes: int
    appliance: str
    main_ingredient: str
    ingredients: frozenset[str]
    dietary_tags: tuple[str, ...] = field(default=(), compare=False)

    @property
    def shape(self) -> tuple[MealType, TasteProfile, str]:
        """Return the (meal type, taste, appliance) combination."""
        return (self.meal_type, self.taste_profile, self.appliance)


@dataclass(frozen=True)
class Preferences:
    """Optional filters applied when seeding a session's candidates."""

    meal_type: MealType | None = None
    taste_profile: TasteProfile | None = None
    max_cook_time: int | None = None
