"""Canonical ingredient names.

Every ingredient name that enters the engine goes through ``normalize``:

1. trim, lowercase and collapse whitespace,
2. strip punctuation,
3. strip a simple plural from the last word,
4. map through the synonym table.

``equivalent`` is the only way other modules compare ingredient names.
"""

import re
import unicodedata

_PUNCTUATION = re.compile(r"[^a-z0-9\s]")
_SEPARATORS = re.compile(r"[-/_]")
_WHITESPACE = re.compile(r"\s+")

# Words ending in "s" that are not plurals.
_INVARIANT_WORDS = frozenset(
    {
        "asparagus",
        "brussels",
        "couscous",
        "grits",
        "hummus",
        "molasses",
        "oats",
        "swiss",
    }
)

_IRREGULAR_PLURALS = {
    "chilies": "chili",
    "chillies": "chilli",
    "halves": "half",
    "leaves": "leaf",
    "loaves": "loaf",
}

# Singulars ending in "ie", whose plural "-ies" must not become "-y".
_IE_SINGULARS = frozenset(
    {
        "brownie",
        "calorie",
        "cookie",
        "pie",
        "smoothie",
        "veggie",
    }
)

# Each group lists names for the same ingredient; the first one is canonical.
# Groups that share a name are merged.
SYNONYM_GROUPS: tuple[tuple[str, ...], ...] = (
    (
        "chicken",
        "chicken breast",
        "chicken breasts",
        "frozen chicken",
        "chicken thighs",
    ),
    ("beef", "ground beef", "frozen beef", "beef strips"),
    ("turkey", "turkey breast", "ground turkey"),
    ("yogurt", "greek yogurt", "plain yogurt"),
    ("bell pepper", "red bell pepper", "green bell pepper", "yellow bell pepper"),
    ("onion", "yellow onion", "white onion", "red onion"),
    ("tomato", "roma tomato", "cherry tomatoes"),
    ("pasta", "spaghetti", "spaghetti pasta", "whole wheat pasta", "noodles"),
    ("tuna", "canned tuna", "tuna fish", "fresh tuna"),
    ("salmon", "fresh salmon", "frozen salmon"),
    ("shrimp", "frozen shrimp", "prawns"),
    ("tofu", "extra firm tofu", "firm tofu", "silken tofu"),
    ("lentils", "red lentils", "green lentils", "black lentils"),
    ("quinoa", "red quinoa", "white quinoa"),
    ("almond", "almonds"),
    ("banana", "bananas"),
    ("granola", "granola bars"),
    ("egg", "eggs", "large eggs"),
    ("scallion", "green onion", "spring onion"),
    ("cilantro", "coriander leaves", "fresh cilantro"),
    ("garlic", "garlic cloves", "fresh garlic"),
    ("olive oil", "extra virgin olive oil"),
)


def _clean(raw: str) -> str:
    text = unicodedata.normalize("NFKD", raw).encode("ascii", "ignore").decode()
    text = _WHITESPACE.sub(" ", text.strip().lower())
    text = _SEPARATORS.sub(" ", text)
    text = _PUNCTUATION.sub("", text)
    return _WHITESPACE.sub(" ", text).strip()


def _singular(word: str) -> str:  # noqa: PLR0911
    if word in _INVARIANT_WORDS or len(word) <= 3:  # noqa: PLR2004
        return word
    if word in _IRREGULAR_PLURALS:
        return _IRREGULAR_PLURALS[word]
    if word.endswith("ies"):
        stem = word[:-3]
        return stem + "ie" if stem + "ie" in _IE_SINGULARS else stem + "y"
    if word.endswith("oes"):
        return word[:-2]
    if word.endswith(("ches", "shes", "sses", "xes")):
        return word[:-2]
    if word.endswith(("ss", "us", "is")):
        return word
    if word.endswith("s"):
        return word[:-1]
    return word


def _base_form(raw: str) -> str:
    """Apply cleaning and plural stripping, without synonyms."""
    cleaned = _clean(raw)
    if not cleaned:
        return cleaned
    words = cleaned.split(" ")
    words[-1] = _singular(words[-1])
    return " ".join(words)


def build_synonym_table(groups: tuple[tuple[str, ...], ...]) -> dict[str, str]:
    """Merge overlapping groups and map every member to its representative.

    Groups are merged with a union-find pass, so the resulting table is
    closed under transitivity.
    """
    parent: dict[str, str] = {}
    first_seen: dict[str, int] = {}

    def find(name: str) -> str:
        root = name
        while parent[root] != root:
            root = parent[root]
        while parent[name] != root:
            parent[name], name = root, parent[name]
        return root

    def union(left: str, right: str) -> None:
        left_root, right_root = find(left), find(right)
        if left_root == right_root:
            return
        # The name declared earliest stays the representative.
        if first_seen[right_root] < first_seen[left_root]:
            left_root, right_root = right_root, left_root
        parent[right_root] = left_root

    for group in groups:
        members = [_base_form(name) for name in group if _base_form(name)]
        for member in members:
            if member not in parent:
                parent[member] = member
                first_seen[member] = len(first_seen)
        for member in members[1:]:
            union(members[0], member)

    return {name: find(name) for name in parent}


_SYNONYMS = build_synonym_table(SYNONYM_GROUPS)


def normalize(raw: str) -> str:
    """Return the canonical form of an ingredient name."""
    base = _base_form(raw)
    return _SYNONYMS.get(base, base)


def equivalent(left: str, right: str) -> bool:
    """Return True when both names refer to the same ingredient."""
    return normalize(left) == normalize(right)
