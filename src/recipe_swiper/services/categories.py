"""Display categories for ingredient cards."""

DEFAULT_CATEGORY = "ingredient"

# Checked in order; the first category with a keyword in the name wins.
_CATEGORY_KEYWORDS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("oil", ("oil", "butter")),
    ("dairy", ("cheese", "milk", "yogurt")),
    ("spice", ("pepper", "salt", "spice", "sauce")),
    ("vegetable", ("onion", "garlic", "spinach", "tomato", "mushroom")),
    ("grain", ("rice", "pasta", "bread", "toast")),
    ("protein", ("chicken", "beef", "pork", "bacon")),
)


def ingredient_category(ingredient: str) -> str:
    """Return a coarse category for a canonical ingredient name."""
    for category, keywords in _CATEGORY_KEYWORDS:
        if any(keyword in ingredient for keyword in keywords):
            return category
    return DEFAULT_CATEGORY
