"""Dependency container wiring for the application."""

from dataclasses import dataclass

from supabase import create_client

from recipe_swiper.adapters.supabase_ingredient_repository import (
    SupabaseIngredientRepository,
)
from recipe_swiper.adapters.supabase_recipe_repository import SupabaseRecipeRepository
from recipe_swiper.config import Settings
from recipe_swiper.services.catalog import CatalogService
from recipe_swiper.services.dietary import TagDietaryFilter
from recipe_swiper.services.session_store import InMemorySessionStore
from recipe_swiper.services.sessions import SwipeSessionService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    catalog_service: CatalogService
    dietary_filter: TagDietaryFilter
    session_service: SwipeSessionService

    def load_reference_data(self) -> None:
        """Load the recipe catalog and dietary tags from their stores."""
        self.catalog_service.refresh()
        self.dietary_filter.reload()


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container.

    Nothing is read from Supabase until ``load_reference_data`` runs.
    """
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    catalog_service = CatalogService(
        store=SupabaseRecipeRepository(supabase_client),
        refresh_seconds=resolved_settings.catalog_refresh_seconds,
    )
    dietary_filter = TagDietaryFilter(
        repository=SupabaseIngredientRepository(supabase_client)
    )
    session_service = SwipeSessionService(
        catalog_service=catalog_service,
        store=InMemorySessionStore(ttl_seconds=resolved_settings.session_ttl_seconds),
        dietary_filter=dietary_filter,
        broad_stage_threshold=resolved_settings.broad_stage_threshold,
        top_k=resolved_settings.suggestion_top_k,
        low_pool_threshold=resolved_settings.low_pool_threshold,
        cook_time_grace_minutes=resolved_settings.cook_time_grace_minutes,
    )
    return AppContainer(
        settings=resolved_settings,
        catalog_service=catalog_service,
        dietary_filter=dietary_filter,
        session_service=session_service,
    )
