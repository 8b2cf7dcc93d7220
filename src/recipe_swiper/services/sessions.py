"""Swiping sessions: the only mutation surface for session state."""

import logging
import random
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from uuid import UUID, uuid4

from recipe_swiper.domain.recipes import Preferences, Recipe
from recipe_swiper.domain.sessions import SessionSnapshot, SwipeOutcome, SwipeSession
from recipe_swiper.domain.suggestions import Suggestion
from recipe_swiper.services import narrowing
from recipe_swiper.services.catalog import CatalogService
from recipe_swiper.services.dietary import DietaryFilter, recipe_permitted
from recipe_swiper.services.selector import (
    BROAD_STAGE_THRESHOLD,
    LOW_POOL_THRESHOLD,
    TOP_K,
    pick_suggestion,
    select_next,
    stage_for,
)
from recipe_swiper.services.session_store import SessionStore

_logger = logging.getLogger(__name__)


class SessionNotFoundError(LookupError):
    """Raised when a session id is unknown or has expired."""

    def __init__(self, session_id: UUID) -> None:
        super().__init__(f"Session {session_id} not found")
        self.session_id = session_id


@dataclass
class SwipeSessionService:
    """Runs swiping sessions against the shared recipe catalog."""

    catalog_service: CatalogService
    store: SessionStore
    dietary_filter: DietaryFilter
    rng: random.Random = field(default_factory=random.Random)
    broad_stage_threshold: int = BROAD_STAGE_THRESHOLD
    top_k: int = TOP_K
    low_pool_threshold: int = LOW_POOL_THRESHOLD
    cook_time_grace_minutes: int = 0

    def start_session(
        self,
        preferences: Preferences | None = None,
        restrictions: Iterable[str] = (),
    ) -> tuple[UUID, SwipeOutcome]:
        """Create a session and return its id with an opening suggestion."""
        resolved = preferences or Preferences()
        resolved_restrictions = tuple(restrictions)
        seed = self._seed(resolved, resolved_restrictions)
        session = SwipeSession(
            id=uuid4(),
            preferences=resolved,
            restrictions=resolved_restrictions,
            seed=seed,
            candidates=seed,
        )
        self.store.put(session)
        _logger.info(
            "Started swipe session: session=%s candidates=%s", session.id, len(seed)
        )
        return session.id, narrowing.outcome_for(session, self._select)

    def accept_ingredient(self, session_id: UUID, ingredient: str) -> SwipeOutcome:
        """Accept an ingredient for a session."""
        session = self._get(session_id)
        return narrowing.accept_ingredient(session, ingredient, self._select)

    def reject_ingredient(self, session_id: UUID, ingredient: str) -> SwipeOutcome:
        """Reject an ingredient for a session."""
        session = self._get(session_id)
        return narrowing.reject_ingredient(session, ingredient, self._select)

    def reset(self, session_id: UUID) -> None:
        """Clear a session's swipes and reseed it from the current catalog."""
        session = self._get(session_id)
        session.seed = self._seed(session.preferences, session.restrictions)
        narrowing.reset(session)

    def get_state(self, session_id: UUID) -> SessionSnapshot:
        """Return a read-only snapshot of a session."""
        session = self._get(session_id)
        return SessionSnapshot(
            accepted=list(session.accepted),
            rejected=list(session.rejected),
            candidates_count=len(session.candidates),
            ready_count=len(session.ready),
        )

    def end_session(self, session_id: UUID) -> None:
        """Forget a session."""
        self.store.delete(session_id)

    def active_sessions(self) -> int:
        """Return the number of live sessions."""
        return self.store.count()

    def _get(self, session_id: UUID) -> SwipeSession:
        session = self.store.get(session_id)
        if session is None:
            raise SessionNotFoundError(session_id)
        return session

    def _seed(
        self, preferences: Preferences, restrictions: tuple[str, ...]
    ) -> frozenset[Recipe]:
        seed = self.catalog_service.current().seed(
            preferences, cook_time_grace_minutes=self.cook_time_grace_minutes
        )
        if not restrictions:
            return seed
        return frozenset(
            recipe for recipe in seed if recipe_permitted(recipe, restrictions)
        )

    def _select(self, session: SwipeSession) -> Suggestion | None:
        stage = stage_for(len(session.accepted), self.broad_stage_threshold)
        ranked = select_next(
            session.candidates,
            session.accepted,
            session.rejected,
            stage,
            top_k=self.top_k,
            is_allowed=self._allowed_for(session),
            low_pool_threshold=self.low_pool_threshold,
        )
        return pick_suggestion(ranked, self.rng)

    def _allowed_for(self, session: SwipeSession) -> Callable[[str], bool] | None:
        if not session.restrictions:
            return None

        def allowed(ingredient: str) -> bool:
            try:
                return self.dietary_filter.is_allowed(ingredient, session.restrictions)
            except Exception:
                _logger.exception(
                    "Dietary lookup failed; allowing ingredient=%s", ingredient
                )
                return True

        return allowed
