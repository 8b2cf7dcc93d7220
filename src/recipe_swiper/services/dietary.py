"""Dietary restriction filtering for ingredient suggestions."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from recipe_swiper.domain.recipes import Recipe
from recipe_swiper.services.normalizer import normalize

_logger = logging.getLogger(__name__)

RELIGIOUS_RESTRICTIONS: dict[str, tuple[str, ...]] = {
    "Judaism (Kosher)": ("Not Kosher",),
    "Islam (Halal)": ("Not Halal",),
    "Hindu (Vegetarian)": ("Not Hindu-Friendly", "Meat"),
    "Buddhism (Vegetarian)": ("Meat",),
    "Jainism (Vegan)": ("Meat", "Contains Dairy", "Contains Eggs"),
    "Seventh-day Adventist": ("Meat", "Not Kosher"),
    "Mormon (Word of Wisdom)": ("Not Kosher",),
    "Orthodox Christian (Fasting)": ("Meat", "Contains Dairy"),
}

ALLERGY_RESTRICTIONS: dict[str, tuple[str, ...]] = {
    "Gluten/Wheat": ("Contains Gluten",),
    "Dairy/Lactose": ("Contains Dairy",),
    "Eggs": ("Contains Eggs",),
    "Tree Nuts": ("Tree Nuts",),
    "Peanuts": ("Peanuts",),
    "Shellfish": ("Shellfish",),
    "Fish": ("Fish",),
    "Soy": ("Contains Soy",),
    "Sesame": ("Contains Sesame",),
    "Corn": ("Corn",),
}

DIETARY_RESTRICTIONS: dict[str, tuple[str, ...]] = {
    **RELIGIOUS_RESTRICTIONS,
    **ALLERGY_RESTRICTIONS,
}


def excluded_tags(restrictions: Iterable[str]) -> set[str]:
    """Return the lowercased dietary tags excluded by the restrictions.

    Unknown restriction names are ignored.
    """
    tags: set[str] = set()
    for restriction in restrictions:
        tags.update(tag.lower() for tag in DIETARY_RESTRICTIONS.get(restriction, ()))
    return tags


def recipe_permitted(recipe: Recipe, restrictions: Iterable[str]) -> bool:
    """Return False when the recipe carries a tag the restrictions exclude."""
    excluded = excluded_tags(restrictions)
    if not excluded:
        return True
    return not {tag.strip().lower() for tag in recipe.dietary_tags} & excluded


def restriction_categories() -> dict[str, dict[str, object]]:
    """Return restriction names grouped for display."""
    return {
        "religious": {
            "title": "Religious Dietary Laws",
            "options": list(RELIGIOUS_RESTRICTIONS),
        },
        "allergies": {
            "title": "Food Allergies & Intolerances",
            "options": list(ALLERGY_RESTRICTIONS),
        },
    }


class DietaryFilter(Protocol):
    """Decides whether an ingredient may be suggested."""

    def is_allowed(self, ingredient: str, restrictions: Iterable[str]) -> bool:
        """Return True when the ingredient fits the restrictions."""


class DietaryTagRepository(Protocol):
    """Source of dietary tags per ingredient name."""

    def load_dietary_tags(self) -> dict[str, list[str]]:
        """Return dietary tags keyed by ingredient name."""


@dataclass
class TagDietaryFilter(DietaryFilter):
    """Dietary filter backed by per-ingredient tags.

    Ingredients without known tags are allowed.
    """

    repository: DietaryTagRepository | None = None
    tags: dict[str, frozenset[str]] = field(default_factory=dict)

    def reload(self) -> None:
        """Reload tags from the repository, keeping the old ones on failure."""
        if self.repository is None:
            return
        try:
            raw_tags = self.repository.load_dietary_tags()
        except Exception:
            _logger.exception(
                "Failed to load dietary tags; keeping %s entries", len(self.tags)
            )
            return
        tags: dict[str, frozenset[str]] = {}
        for name, values in raw_tags.items():
            canonical = normalize(name)
            merged = tags.get(canonical, frozenset()) | {
                value.strip().lower() for value in values if value.strip()
            }
            tags[canonical] = frozenset(merged)
        self.tags = tags
        _logger.info("Loaded dietary tags: ingredients=%s", len(tags))

    def is_allowed(self, ingredient: str, restrictions: Iterable[str]) -> bool:
        """Return False when the ingredient carries an excluded tag."""
        excluded = excluded_tags(restrictions)
        if not excluded:
            return True
        ingredient_tags = self.tags.get(normalize(ingredient))
        if not ingredient_tags:
            return True
        return not (ingredient_tags & excluded)
