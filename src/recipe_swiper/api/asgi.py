"""ASGI entrypoint for the recipe swiper API."""

from recipe_swiper.api.app import create_app
from recipe_swiper.containers import build_container

app = create_app(build_container())
