"""Candidate narrowing for swiping sessions.

A session's state is the triple (accepted, candidates, ready):

* candidates are the recipes containing every accepted ingredient, and only
  ever shrink as ingredients are accepted;
* ready recipes are the candidates whose whole ingredient set is accepted.

The functions here are the only code that writes those fields. Invariants are
checked with ``assert``; a failure is a programming error.
"""

import logging
from collections.abc import Callable, Iterable

from recipe_swiper.domain.recipes import Recipe
from recipe_swiper.domain.sessions import SwipeOutcome, SwipeSession, SwipeStatus
from recipe_swiper.domain.suggestions import Suggestion
from recipe_swiper.services.normalizer import normalize

_logger = logging.getLogger(__name__)

Selector = Callable[[SwipeSession], Suggestion | None]


def narrow(candidates: Iterable[Recipe], accepted: Iterable[str]) -> frozenset[Recipe]:
    """Return the candidates that contain every accepted ingredient."""
    required = frozenset(accepted)
    return frozenset(recipe for recipe in candidates if required <= recipe.ingredients)


def ready_recipes(
    candidates: Iterable[Recipe], accepted: Iterable[str]
) -> frozenset[Recipe]:
    """Return the candidates whose ingredients are all accepted."""
    have = frozenset(accepted)
    return frozenset(recipe for recipe in candidates if recipe.ingredients <= have)


def required_by_all(candidates: frozenset[Recipe], ingredient: str) -> bool:
    """Return True when every candidate needs the ingredient."""
    return bool(candidates) and all(
        ingredient in recipe.ingredients for recipe in candidates
    )


def accept_ingredient(
    session: SwipeSession, raw_ingredient: str, select: Selector
) -> SwipeOutcome:
    """Accept an ingredient and narrow the session's candidates."""
    ingredient = normalize(raw_ingredient)
    previous = session.candidates
    if ingredient in session.rejected:
        session.rejected.remove(ingredient)
    if ingredient not in session.accepted:
        session.accepted.append(ingredient)
    session.candidates = narrow(previous, session.accepted)
    session.ready = ready_recipes(session.candidates, session.accepted)
    assert session.candidates <= previous, "candidates grew after an accept"
    check_invariants(session)
    _logger.info(
        "Accepted ingredient: session=%s ingredient=%s candidates=%s ready=%s",
        session.id,
        ingredient,
        len(session.candidates),
        len(session.ready),
    )
    return outcome_for(session, select)


def reject_ingredient(
    session: SwipeSession, raw_ingredient: str, select: Selector
) -> SwipeOutcome:
    """Reject an ingredient so it is never suggested again.

    Candidates stay as they are unless every one of them needs the rejected
    ingredient, in which case they are all eliminated.
    """
    ingredient = normalize(raw_ingredient)
    if ingredient in session.accepted:
        _logger.info(
            "Ignoring rejection of accepted ingredient: session=%s ingredient=%s",
            session.id,
            ingredient,
        )
        return outcome_for(session, select)
    if ingredient not in session.rejected:
        session.rejected.append(ingredient)
    if required_by_all(session.candidates, ingredient):
        _logger.info(
            "Rejected ingredient required by all candidates: session=%s ingredient=%s",
            session.id,
            ingredient,
        )
        session.candidates = frozenset()
        session.ready = frozenset()
    check_invariants(session)
    return outcome_for(session, select)


def reset(session: SwipeSession) -> None:
    """Clear the session's swipes and restore its starting candidates."""
    session.accepted.clear()
    session.rejected.clear()
    session.candidates = session.seed
    session.ready = frozenset()
    check_invariants(session)


def outcome_for(session: SwipeSession, select: Selector) -> SwipeOutcome:
    """Describe the session's current state, with a suggestion when needed."""
    if not session.candidates:
        return SwipeOutcome(status=SwipeStatus.DEAD_END, ready=(), candidates_count=0)
    if session.ready:
        return SwipeOutcome(
            status=SwipeStatus.READY,
            ready=tuple(sorted(session.ready, key=lambda recipe: recipe.id)),
            candidates_count=len(session.candidates),
        )
    suggestion = select(session)
    if suggestion is not None:
        assert suggestion.ingredient not in session.accepted
        assert suggestion.ingredient not in session.rejected
    return SwipeOutcome(
        status=SwipeStatus.NARROWING if suggestion else SwipeStatus.EXHAUSTED,
        ready=(),
        candidates_count=len(session.candidates),
        suggestion=suggestion,
    )


def check_invariants(session: SwipeSession) -> None:
    """Assert the relations that must hold between the session's sets."""
    assert session.ready <= session.candidates, "ready is not a subset of candidates"
    assert session.candidates <= session.seed, "candidates outside the seed pool"
    assert not set(session.accepted) & set(session.rejected), (
        "an ingredient is both accepted and rejected"
    )
