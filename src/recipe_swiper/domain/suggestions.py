"""Domain models for ingredient suggestions."""

from dataclasses import dataclass
from enum import Enum


class Stage(Enum):
    """Heuristic regime used to rank suggestions."""

    BROAD = "broad"
    SPECIFIC = "specific"


@dataclass(frozen=True)
class Suggestion:
    """Next ingredient to offer, with the counts it was ranked by."""

    ingredient: str
    recipe_matches: int
    flexibility: int
    score: int
    stage: Stage
