"""Tests for the swiping session service."""

from uuid import uuid4

import pytest

from recipe_swiper.domain.recipes import MealType, Preferences
from recipe_swiper.domain.sessions import SessionSnapshot, SwipeStatus
from recipe_swiper.services.dietary import TagDietaryFilter
from recipe_swiper.services.sessions import SessionNotFoundError
from tests.conftest import FailingDietaryFilter, build_session_service, make_recipe


def test_start_session_offers_an_opening_suggestion() -> None:
    service = build_session_service()

    session_id, outcome = service.start_session()

    assert outcome.status is SwipeStatus.NARROWING
    assert outcome.candidates_count == 2
    assert outcome.suggestion is not None
    assert outcome.suggestion.ingredient in {"egg", "spinach", "cheese"}
    assert service.get_state(session_id) == SessionSnapshot([], [], 2, 0)


def test_scenario_flow_reaches_a_ready_recipe() -> None:
    service = build_session_service()
    session_id, _ = service.start_session()

    service.accept_ingredient(session_id, "egg")
    service.accept_ingredient(session_id, "spinach")
    outcome = service.accept_ingredient(session_id, "cheese")

    assert outcome.status is SwipeStatus.READY
    assert [recipe.id for recipe in outcome.ready] == ["r1"]
    assert service.get_state(session_id) == SessionSnapshot(
        ["egg", "spinach", "cheese"], [], 1, 1
    )


def test_broad_suggestion_comes_from_missing_ingredients() -> None:
    service = build_session_service()
    session_id, _ = service.start_session()

    outcome = service.accept_ingredient(session_id, "egg")

    assert outcome.suggestion is not None
    assert outcome.suggestion.ingredient in {"spinach", "cheese", "tomato"}


def test_accepting_missing_ingredient_is_a_dead_end() -> None:
    service = build_session_service()
    session_id, _ = service.start_session()

    outcome = service.accept_ingredient(session_id, "banana")

    assert outcome.status is SwipeStatus.DEAD_END
    assert service.get_state(session_id).candidates_count == 0


def test_reset_is_idempotent() -> None:
    service = build_session_service()
    session_id, _ = service.start_session()
    service.accept_ingredient(session_id, "banana")
    service.reject_ingredient(session_id, "tomato")

    service.reset(session_id)
    service.reset(session_id)

    assert service.get_state(session_id) == SessionSnapshot([], [], 2, 0)


def test_reset_keeps_session_preferences() -> None:
    recipes = [
        make_recipe("breakfast", ["egg", "toast"], MealType.BREAKFAST),
        make_recipe("dinner", ["egg", "rice"], MealType.DINNER),
    ]
    service = build_session_service(recipes)
    session_id, outcome = service.start_session(
        Preferences(meal_type=MealType.BREAKFAST)
    )
    assert outcome.candidates_count == 1

    service.accept_ingredient(session_id, "toast")
    service.reset(session_id)

    assert service.get_state(session_id).candidates_count == 1


def test_unknown_session_raises_for_every_operation() -> None:
    service = build_session_service()
    missing = uuid4()

    with pytest.raises(SessionNotFoundError):
        service.accept_ingredient(missing, "egg")
    with pytest.raises(SessionNotFoundError):
        service.reject_ingredient(missing, "egg")
    with pytest.raises(SessionNotFoundError):
        service.reset(missing)
    with pytest.raises(SessionNotFoundError) as excinfo:
        service.get_state(missing)
    assert excinfo.value.session_id == missing


def test_sessions_do_not_share_state() -> None:
    service = build_session_service()
    first, _ = service.start_session()
    second, _ = service.start_session()

    service.accept_ingredient(first, "cheese")

    assert service.get_state(first).candidates_count == 1
    assert service.get_state(second) == SessionSnapshot([], [], 2, 0)


def test_suggestions_never_repeat_swiped_ingredients() -> None:
    recipes = [
        make_recipe("r1", ["egg", "spinach", "cheese"]),
        make_recipe("r2", ["egg", "spinach", "tomato"]),
        make_recipe("r3", ["egg", "rice", "beans"]),
        make_recipe("r4", ["rice", "beans", "corn"]),
        make_recipe("r5", ["pasta", "tomato", "basil"]),
        make_recipe("r6", ["pasta", "cheese", "basil"]),
    ]
    for seed in range(10):
        service = build_session_service(recipes, seed=seed)
        session_id, outcome = service.start_session()
        seen: set[str] = set()
        steps = 0
        while outcome.status is SwipeStatus.NARROWING and steps < 20:
            ingredient = outcome.suggestion.ingredient
            assert ingredient not in seen
            seen.add(ingredient)
            if steps % 3 == 2:
                outcome = service.reject_ingredient(session_id, ingredient)
            else:
                outcome = service.accept_ingredient(session_id, ingredient)
            steps += 1
        assert outcome.status is not SwipeStatus.NARROWING


def test_restricted_ingredients_are_not_suggested() -> None:
    dietary_filter = TagDietaryFilter(tags={"cheese": frozenset({"contains dairy"})})
    service = build_session_service(dietary_filter=dietary_filter)
    session_id, _ = service.start_session(restrictions=["Dairy/Lactose"])
    service.accept_ingredient(session_id, "egg")

    outcome = service.accept_ingredient(session_id, "spinach")

    assert outcome.suggestion is not None
    assert outcome.suggestion.ingredient == "tomato"


def test_session_is_exhausted_when_every_option_is_restricted() -> None:
    dietary_filter = TagDietaryFilter(
        tags={
            "cheese": frozenset({"contains dairy"}),
            "tomato": frozenset({"contains dairy"}),
        }
    )
    service = build_session_service(dietary_filter=dietary_filter)
    session_id, _ = service.start_session(restrictions=["Dairy/Lactose"])
    service.accept_ingredient(session_id, "egg")

    outcome = service.accept_ingredient(session_id, "spinach")

    assert outcome.status is SwipeStatus.EXHAUSTED
    assert outcome.candidates_count == 2


def test_failing_dietary_filter_allows_ingredients() -> None:
    service = build_session_service(dietary_filter=FailingDietaryFilter())
    session_id, outcome = service.start_session(restrictions=["Eggs"])

    assert outcome.status is SwipeStatus.NARROWING
    assert outcome.suggestion is not None


def test_empty_catalog_starts_at_a_dead_end() -> None:
    service = build_session_service(recipes=[])

    _, outcome = service.start_session()

    assert outcome.status is SwipeStatus.DEAD_END
    assert outcome.candidates_count == 0


def test_cook_time_grace_widens_the_seed() -> None:
    recipes = [
        make_recipe("quick", ["egg"], cook_time_minutes=20),
        make_recipe("slower", ["rice"], cook_time_minutes=30),
        make_recipe("slow", ["beans"], cook_time_minutes=60),
    ]
    preferences = Preferences(max_cook_time=20)

    strict = build_session_service(recipes)
    relaxed = build_session_service(recipes, cook_time_grace_minutes=15)

    assert strict.start_session(preferences)[1].candidates_count == 1
    assert relaxed.start_session(preferences)[1].candidates_count == 2


def test_end_session_forgets_it() -> None:
    service = build_session_service()
    session_id, _ = service.start_session()
    service.start_session()
    assert service.active_sessions() == 2

    service.end_session(session_id)

    assert service.active_sessions() == 1
    with pytest.raises(SessionNotFoundError):
        service.get_state(session_id)


def test_restrictions_drop_tagged_recipes_from_the_seed() -> None:
    recipes = [
        make_recipe("r1", ["egg", "cheese"], dietary_tags=("Contains Dairy",)),
        make_recipe("r2", ["egg", "tomato"]),
    ]
    service = build_session_service(recipes)

    session_id, outcome = service.start_session(restrictions=["Dairy/Lactose"])
    assert outcome.candidates_count == 1

    service.accept_ingredient(session_id, "egg")
    service.reset(session_id)

    assert service.get_state(session_id).candidates_count == 1
    assert service.start_session()[1].candidates_count == 2
