"""Supabase-backed ingredient dietary tags."""

from dataclasses import dataclass

from supabase import Client

from recipe_swiper.adapters.supabase_rows import parse_text_array
from recipe_swiper.services.dietary import DietaryTagRepository


@dataclass
class SupabaseIngredientRepository(DietaryTagRepository):
    """Reads ingredient dietary tags from Supabase."""

    client: Client

    def load_dietary_tags(self) -> dict[str, list[str]]:
        """Return dietary tags keyed by ingredient name."""
        response = self.client.table("ingredients").select("name, dietary_tags").execute()
        if response.data is None:
            raise RuntimeError("Failed to load ingredient dietary tags")
        tags: dict[str, list[str]] = {}
        for row in response.data:
            name = str(row.get("name") or "").strip()
            if not name:
                continue
            tags.setdefault(name, []).extend(parse_text_array(row.get("dietary_tags")))
        return tags
