"""Pydantic models for the swipe API payloads."""

from enum import Enum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from recipe_swiper.domain.recipes import MealType, Preferences, Recipe, TasteProfile
from recipe_swiper.domain.sessions import SessionSnapshot, SwipeOutcome
from recipe_swiper.domain.suggestions import Suggestion
from recipe_swiper.services.categories import ingredient_category


class ApiModel(BaseModel):
    """Base model using camelCase field names on the wire."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SwipeDirection(Enum):
    """Direction of a swipe."""

    ACCEPT = "accept"
    REJECT = "reject"


class StartSessionRequest(ApiModel):
    """Preferences for a new swiping session."""

    meal_type: MealType | None = None
    taste_profile: TasteProfile | None = None
    max_cook_time: int | None = Field(default=None, gt=0)
    dietary_restrictions: list[str] = Field(default_factory=list)

    def preferences(self) -> Preferences:
        """Return the domain preferences for this request."""
        return Preferences(
            meal_type=self.meal_type,
            taste_profile=self.taste_profile,
            max_cook_time=self.max_cook_time,
        )


class SwipeRequest(ApiModel):
    """A single accept or reject swipe."""

    session_id: UUID
    ingredient_name: str = Field(min_length=1)
    direction: SwipeDirection


class SessionRequest(ApiModel):
    """Request that only identifies a session."""

    session_id: UUID


class RecipeView(ApiModel):
    """Recipe as returned to clients."""

    id: str
    title: str
    meal_type: str
    taste_profile: str
    cook_time_minutes: int
    appliance: str
    main_ingredient: str
    ingredients: list[str]

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> "RecipeView":
        return cls(
            id=recipe.id,
            title=recipe.title,
            meal_type=recipe.meal_type.value,
            taste_profile=recipe.taste_profile.value,
            cook_time_minutes=recipe.cook_time_minutes,
            appliance=recipe.appliance,
            main_ingredient=recipe.main_ingredient,
            ingredients=sorted(recipe.ingredients),
        )


class SuggestionView(ApiModel):
    """Suggested next ingredient."""

    ingredient: str
    recipe_matches: int
    flexibility: int
    stage: str
    category: str

    @classmethod
    def from_suggestion(cls, suggestion: Suggestion | None) -> "SuggestionView | None":
        if suggestion is None:
            return None
        return cls(
            ingredient=suggestion.ingredient,
            recipe_matches=suggestion.recipe_matches,
            flexibility=suggestion.flexibility,
            stage=suggestion.stage.value,
            category=ingredient_category(suggestion.ingredient),
        )


class SwipeResponse(ApiModel):
    """Result of a swipe."""

    status: str
    ready: list[RecipeView]
    candidates_count: int
    suggestion: SuggestionView | None = None

    @classmethod
    def from_outcome(cls, outcome: SwipeOutcome) -> "SwipeResponse":
        return cls(
            status=outcome.status.value,
            ready=[RecipeView.from_recipe(recipe) for recipe in outcome.ready],
            candidates_count=outcome.candidates_count,
            suggestion=SuggestionView.from_suggestion(outcome.suggestion),
        )


class StartSessionResponse(SwipeResponse):
    """New session id with its opening state."""

    session_id: UUID


class SessionStateResponse(ApiModel):
    """Read-only session state."""

    accepted: list[str]
    rejected: list[str]
    candidates_count: int
    ready_count: int

    @classmethod
    def from_snapshot(cls, snapshot: SessionSnapshot) -> "SessionStateResponse":
        return cls(
            accepted=snapshot.accepted,
            rejected=snapshot.rejected,
            candidates_count=snapshot.candidates_count,
            ready_count=snapshot.ready_count,
        )
