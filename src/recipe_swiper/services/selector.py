"""Next-ingredient selection.

Candidates are scanned for the ingredients they still miss. Each missing
ingredient is tallied by how many candidates it appears in (recipe matches)
and by how many recipe shapes, meaning meal type, taste and appliance, it
appears in (flexibility).

Early in a session (broad stage) flexible ingredients rank first so the pool
is not narrowed to a single style too soon. Later (specific stage) the
ingredients that help complete the most candidates rank first. When only a
handful of candidates remain, recipe matches decide regardless of stage.
"""

import random
from collections import defaultdict
from collections.abc import Callable, Collection, Iterable

from recipe_swiper.domain.recipes import Recipe
from recipe_swiper.domain.suggestions import Stage, Suggestion

BROAD_STAGE_THRESHOLD = 4
TOP_K = 3
LOW_POOL_THRESHOLD = 5

_BROAD_FLEXIBILITY_WEIGHT = 10
_SPECIFIC_MATCH_WEIGHT = 2


def stage_for(accepted_count: int, threshold: int = BROAD_STAGE_THRESHOLD) -> Stage:
    """Return the ranking stage for the number of accepted ingredients."""
    return Stage.BROAD if accepted_count <= threshold else Stage.SPECIFIC


def score(recipe_matches: int, flexibility: int, stage: Stage) -> int:
    """Score an ingredient for a stage."""
    if stage is Stage.BROAD:
        return flexibility * _BROAD_FLEXIBILITY_WEIGHT + recipe_matches
    return recipe_matches * _SPECIFIC_MATCH_WEIGHT + flexibility


def select_next(  # noqa: PLR0913
    candidates: Collection[Recipe],
    accepted: Iterable[str],
    rejected: Iterable[str],
    stage: Stage,
    top_k: int = TOP_K,
    is_allowed: Callable[[str], bool] | None = None,
    low_pool_threshold: int = LOW_POOL_THRESHOLD,
) -> list[Suggestion]:
    """Rank the ingredients missing from the candidates and return the top ones.

    Accepted and rejected ingredients are never returned. ``is_allowed`` is
    checked once per ingredient before it is scored.
    """
    if not candidates or top_k <= 0:
        return []
    accepted_set = set(accepted)
    excluded = accepted_set | set(rejected)

    matches: dict[str, int] = defaultdict(int)
    shapes: dict[str, set[tuple[object, ...]]] = defaultdict(set)
    allowed_cache: dict[str, bool] = {}
    for recipe in candidates:
        for ingredient in recipe.ingredients - accepted_set:
            if ingredient in excluded:
                continue
            if is_allowed is not None:
                if ingredient not in allowed_cache:
                    allowed_cache[ingredient] = is_allowed(ingredient)
                if not allowed_cache[ingredient]:
                    continue
            matches[ingredient] += 1
            shapes[ingredient].add(recipe.shape)

    suggestions = [
        Suggestion(
            ingredient=ingredient,
            recipe_matches=count,
            flexibility=len(shapes[ingredient]),
            score=score(count, len(shapes[ingredient]), stage),
            stage=stage,
        )
        for ingredient, count in matches.items()
    ]
    if len(candidates) < low_pool_threshold:
        suggestions.sort(
            key=lambda item: (-item.recipe_matches, -item.score, item.ingredient)
        )
    else:
        suggestions.sort(key=lambda item: (-item.score, item.ingredient))
    return suggestions[:top_k]


def pick_suggestion(
    ranked: list[Suggestion], rng: random.Random | None = None
) -> Suggestion | None:
    """Pick uniformly among the ranked suggestions."""
    if not ranked:
        return None
    return (rng or random).choice(ranked)
