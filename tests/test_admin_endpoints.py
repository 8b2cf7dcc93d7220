"""Tests for admin endpoints."""

from fastapi.testclient import TestClient

from recipe_swiper.api.app import create_app
from recipe_swiper.domain.recipes import MealType
from tests.conftest import make_recipe

_HEADERS = {"X-Admin-Token": "admin-token"}


def test_admin_catalog_endpoint(container) -> None:
    app = create_app(container)
    client = TestClient(app)

    response = client.get("/admin/catalog", headers=_HEADERS)

    assert response.status_code == 200
    assert response.json() == {
        "recipes": 2,
        "by_meal_type": {"breakfast": 0, "lunch": 0, "dinner": 2},
    }


def test_admin_refresh_reloads_catalog_and_tags(container, recipe_store) -> None:
    app = create_app(container)
    client = TestClient(app)
    client.get("/admin/catalog", headers=_HEADERS)
    recipe_store.recipes.append(
        make_recipe("r3", ["oats", "banana"], MealType.BREAKFAST)
    )

    response = client.post("/admin/catalog/refresh", headers=_HEADERS)

    assert response.status_code == 200
    assert response.json() == {"recipes": 3}
    assert container.dietary_filter.tags["cheese"] == frozenset({"contains dairy"})


def test_admin_dietary_restrictions_endpoint(container) -> None:
    app = create_app(container)
    client = TestClient(app)

    response = client.get("/admin/dietary-restrictions", headers=_HEADERS)

    assert response.status_code == 200
    data = response.json()
    assert "Judaism (Kosher)" in data["religious"]["options"]
    assert "Peanuts" in data["allergies"]["options"]


def test_admin_sessions_endpoint(container) -> None:
    app = create_app(container)
    client = TestClient(app)
    client.post("/session", json={})
    client.post("/session", json={})

    response = client.get("/admin/sessions", headers=_HEADERS)

    assert response.status_code == 200
    assert response.json() == {"active": 2}
