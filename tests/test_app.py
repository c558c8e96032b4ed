from __future__ import annotations

import logging
from pathlib import Path
import sys

sys.path.insert(0, str(Path(__file__).resolve().parents[1]))

from recipe_book import create_app
from recipe_book.store import RecipeStore


class RecordingRecipeStore(RecipeStore):
    """Store that remembers which deleting operations were called."""

    def __init__(self) -> None:
        super().__init__()
        self.delete_calls: list[str] = []

    def delete(self, recipe_id: str) -> None:
        self.delete_calls.append(recipe_id)
        super().delete(recipe_id)

    def delete_all(self) -> None:
        self.delete_calls.append("*")
        super().delete_all()


def create_test_client():
    store = RecordingRecipeStore()
    app = create_app(store=store)
    app.config.update(TESTING=True)
    return app.test_client(), store


def test_index_redirects_to_compose():
    client, _ = create_test_client()

    response = client.get("/")

    assert response.status_code == 302
    assert response.headers["Location"].endswith("/compose")


def test_recipes_page_shows_existing_recipes():
    client, store = create_test_client()
    store.add("Chocolate Cake", "flour\nsugar", "Bake it.")

    response = client.get("/recipes")

    assert response.status_code == 200
    page = response.get_data(as_text=True)
    assert "Chocolate Cake" in page
    assert "<li>sugar</li>" in page
    assert "1 Recipe<" in page
    assert "Delete All Recipes" in page


def test_recipes_page_counts_plural_and_empty_state():
    client, store = create_test_client()

    page = client.get("/recipes").get_data(as_text=True)
    assert "0 Recipes" in page
    assert "No recipes yet! Start cooking!" in page
    assert "Delete All Recipes" not in page

    store.add("Soup", "", "")
    store.add("Salad", "", "")
    page = client.get("/recipes").get_data(as_text=True)
    assert "2 Recipes" in page


def test_can_add_recipe_via_form():
    client, store = create_test_client()

    response = client.post(
        "/compose",
        data={
            "title": "Summer Salad",
            "ingredients": "tomatoes\ncucumber",
            "instructions": "Mix everything.",
        },
        follow_redirects=True,
    )

    assert response.status_code == 200
    assert [recipe.title for recipe in store.list()] == ["Summer Salad"]
    assert "New recipe added!" in response.get_data(as_text=True)


def test_cannot_add_recipe_without_title():
    client, store = create_test_client()

    response = client.post(
        "/compose",
        data={"title": "   ", "ingredients": "eggs"},
        follow_redirects=True,
    )

    assert response.status_code == 200
    assert len(store) == 0
    assert b"Recipe title cannot be empty." in response.data


def test_edit_prefills_compose_form_and_updates():
    client, store = create_test_client()
    recipe_id = store.add("Pasta Salad", "pasta\ntomatoes", "Mix together.")

    response = client.post(f"/recipes/{recipe_id}/edit", follow_redirects=True)

    assert response.status_code == 200
    page = response.get_data(as_text=True)
    assert "Edit Recipe" in page
    assert 'value="Pasta Salad"' in page
    assert "pasta\ntomatoes" in page
    assert "Update Recipe" in page

    response = client.post(
        "/compose",
        data={"title": "Pasta Salad v2", "ingredients": "pasta", "instructions": "Stir."},
        follow_redirects=True,
    )

    assert "Recipe updated!" in response.get_data(as_text=True)
    assert len(store) == 1
    updated = store.get(recipe_id)
    assert (updated.title, updated.ingredients, updated.instructions) == (
        "Pasta Salad v2",
        "pasta",
        "Stir.",
    )
    assert "Add New Recipe" in client.get("/compose").get_data(as_text=True)


def test_cancel_edit_returns_to_add_form():
    client, store = create_test_client()
    recipe_id = store.add("Soup", "water", "Boil.")
    client.post(f"/recipes/{recipe_id}/edit")

    response = client.post("/compose/cancel", follow_redirects=True)

    page = response.get_data(as_text=True)
    assert "Add New Recipe" in page
    assert 'value="Soup"' not in page


def test_edit_unknown_recipe():
    client, _ = create_test_client()

    response = client.post("/recipes/missing/edit", follow_redirects=True)

    assert b"Recipe not found." in response.data


def test_delete_requires_confirmation():
    client, store = create_test_client()
    recipe_id = store.add("Tofu Stir Fry", "tofu", "Cook it.")

    response = client.get(f"/recipes/{recipe_id}/delete")
    assert response.status_code == 200
    assert b"Are you sure you want to delete" in response.data

    client.post(f"/recipes/{recipe_id}/delete", data={"confirm": "no"})
    client.post(f"/recipes/{recipe_id}/delete")

    assert store.delete_calls == []
    assert len(store) == 1


def test_confirmed_delete_removes_item():
    client, store = create_test_client()
    recipe_id = store.add("Tofu Stir Fry", "tofu", "Cook it.")

    response = client.post(
        f"/recipes/{recipe_id}/delete",
        data={"confirm": "yes"},
        follow_redirects=True,
    )

    assert response.status_code == 200
    assert store.delete_calls == [recipe_id]
    assert len(store) == 0
    assert b"Recipe has been removed!" in response.data


def test_delete_all_requires_confirmation():
    client, store = create_test_client()
    store.add("Soup", "", "")
    store.add("Salad", "", "")

    assert b"This cannot be undone!" in client.get("/recipes/delete-all").data
    client.post("/recipes/delete-all", data={"confirm": "no"})
    assert store.delete_calls == []
    assert len(store) == 2

    response = client.post("/recipes/delete-all", data={"confirm": "yes"}, follow_redirects=True)

    assert store.delete_calls == ["*"]
    assert len(store) == 0
    assert b"All recipes deleted!" in response.data


def test_about_shows_version_and_total():
    client, store = create_test_client()
    store.add("Soup", "", "")

    page = client.get("/about").get_data(as_text=True)

    assert "Version 1.0" in page
    assert "Total Recipes: 1" in page


def test_compose_leaves_edit_mode_when_recipe_is_deleted():
    client, store = create_test_client()
    recipe_id = store.add("Soup", "water", "Boil.")
    client.post(f"/recipes/{recipe_id}/edit")
    store.delete(recipe_id)

    page = client.get("/compose").get_data(as_text=True)
    assert "Add New Recipe" in page
    assert "Update Recipe" not in page
    assert 'value="Soup"' in page

    response = client.post(
        "/compose",
        data={"title": "typed", "ingredients": "stock", "instructions": "Simmer."},
        follow_redirects=True,
    )

    assert "New recipe added!" in response.get_data(as_text=True)
    assert [recipe.title for recipe in store.list()] == ["typed"]


def test_saving_edit_of_missing_recipe_keeps_typed_values():
    store = RecordingRecipeStore()
    app = create_app(store=store)
    app.config.update(TESTING=True)
    client = app.test_client()
    recipe_id = store.add("Soup", "water", "Boil.")
    client.post(f"/recipes/{recipe_id}/edit")
    app.config["RECIPE_COMPOSE"].close()
    store.delete(recipe_id)

    response = client.post(
        "/compose",
        data={"title": "typed", "ingredients": "stock", "instructions": "Simmer."},
        follow_redirects=True,
    )

    assert response.status_code == 200
    page = response.get_data(as_text=True)
    assert "Recipe not found." in page
    assert "Add New Recipe" in page
    assert 'value="typed"' in page
    assert len(store) == 0


def test_unknown_log_level_falls_back_to_info(monkeypatch):
    monkeypatch.setenv("RECIPES_LOG_LEVEL", "verbose")
    app = create_app(store=RecipeStore())
    assert app.logger.level == logging.INFO

    monkeypatch.setenv("RECIPES_LOG_LEVEL", "debug")
    app = create_app(store=RecipeStore())
    assert app.logger.level == logging.DEBUG
