"""Domain models for swiping sessions."""

from dataclasses import dataclass, field
from enum import Enum
from uuid import UUID

from recipe_swiper.domain.recipes import Preferences, Recipe
from recipe_swiper.domain.suggestions import Suggestion


class SwipeStatus(Enum):
    """Where a session stands after a swipe."""

    READY = "ready"
    NARROWING = "narrowing"
    EXHAUSTED = "exhausted"
    DEAD_END = "dead_end"


@dataclass
class SwipeSession:
    """Mutable state of one swiping flow.

    Only the session service mutates instances of this class.
    """

    id: UUID
    preferences: Preferences
    restrictions: tuple[str, ...]
    seed: frozenset[Recipe]
    candidates: frozenset[Recipe]
    accepted: list[str] = field(default_factory=list)
    rejected: list[str] = field(default_factory=list)
    ready: frozenset[Recipe] = frozenset()


@dataclass(frozen=True)
class SwipeOutcome:
    """Result of accepting or rejecting an ingredient."""

    status: SwipeStatus
    ready: tuple[Recipe, ...]
    candidates_count: int
    suggestion: Suggestion | None = None


@dataclass(frozen=True)
class SessionSnapshot:
    """Read-only view of a session."""

    accepted: list[str]
    rejected: list[str]
    candidates_count: int
    ready_count: int
