import logging
import os
from typing import Optional

from flask import Flask, flash, redirect, render_template, request, url_for

from .compose import ComposeSurface
from .errors import NotFoundError, ValidationError
from .models import Recipe
from .storage import RecipeRepository
from .store import RecipeStore

__version__ = "1.0"


def create_app(store: Optional[RecipeRepository] = None) -> Flask:
    """Create and configure the Flask application.

    Parameters
    ----------
    store:
        Optional recipe repository. When ``None`` the application starts with
        an empty in-memory :class:`RecipeStore`; recipes are not kept across
        restarts.
    """

    app = Flask(__name__)
    app.config.setdefault("MAX_CONTENT_LENGTH", 1024 * 1024)
    app.config["APP_VERSION"] = __version__
    app.secret_key = os.environ.get("FLASK_SECRET_KEY", "development-secret-change-me")
    app.logger.setLevel(_log_level(os.environ.get("RECIPES_LOG_LEVEL", "INFO")))

    if store is None:
        store = RecipeStore()
    app.config["RECIPE_STORE"] = store
    app.config["RECIPE_COMPOSE"] = ComposeSurface(store)

    @app.context_processor
    def inject_counts() -> dict:
        return {"recipe_count": len(app.config["RECIPE_STORE"])}

    @app.get("/")
    def index():
        return redirect(url_for("compose"))

    @app.get("/compose")
    def compose() -> str:
        surface: ComposeSurface = app.config["RECIPE_COMPOSE"]
        draft = surface.observe()
        page_title = "Edit Recipe" if draft.is_editing else "Add New Recipe"
        return render_template("compose.html", draft=draft, title=page_title, active_tab="compose")

    @app.post("/compose")
    def save_recipe():
        surface: ComposeSurface = app.config["RECIPE_COMPOSE"]

        title = request.form.get("title", "")
        ingredients = request.form.get("ingredients", "")
        instructions = request.form.get("instructions", "")
        editing = surface.draft.is_editing

        try:
            recipe_id = surface.submit(title, ingredients, instructions)
        except ValidationError:
            flash("Recipe title cannot be empty.", "error")
            return redirect(url_for("compose"))
        except KeyError:
            flash("Recipe not found. Save again to keep it as a new recipe.", "error")
            return redirect(url_for("compose"))

        if editing:
            app.logger.info("Recipe %s updated from the compose form", recipe_id)
            flash("Recipe updated!", "success")
        else:
            app.logger.info("Recipe %s added from the compose form", recipe_id)
            flash("New recipe added!", "success")
        return redirect(url_for("compose"))

    @app.post("/compose/cancel")
    def cancel_edit():
        app.config["RECIPE_COMPOSE"].cancel()
        return redirect(url_for("compose"))

    @app.get("/recipes")
    def recipes() -> str:
        recipes = app.config["RECIPE_STORE"].list()
        return render_template(
            "recipes.html",
            recipes=recipes,
            title="My Recipes",
            active_tab="recipes",
        )

    @app.post("/recipes/<recipe_id>/edit")
    def edit_recipe(recipe_id: str):
        store_backend: RecipeRepository = app.config["RECIPE_STORE"]

        try:
            store_backend.flag_for_edit(recipe_id)
        except KeyError:
            flash("Recipe not found.", "error")
            return redirect(url_for("recipes"))

        return redirect(url_for("compose"))

    @app.route("/recipes/<recipe_id>/delete", methods=["GET", "POST"])
    def delete_recipe(recipe_id: str):
        store_backend: RecipeRepository = app.config["RECIPE_STORE"]

        if request.method == "GET":
            try:
                recipe = store_backend.get(recipe_id)
            except KeyError:
                flash("Recipe not found.", "error")
                return redirect(url_for("recipes"))
            return render_template(
                "confirm.html",
                title="Delete Recipe",
                message=f"Are you sure you want to delete '{recipe.title}'?",
                action=url_for("delete_recipe", recipe_id=recipe_id),
                confirm_label="Delete",
                active_tab="recipes",
            )

        if not _confirmed():
            return redirect(url_for("recipes"))

        try:
            store_backend.delete(recipe_id)
        except KeyError:
            flash("Recipe not found.", "error")
        else:
            flash("Recipe has been removed!", "success")
        return redirect(url_for("recipes"))

    @app.route("/recipes/delete-all", methods=["GET", "POST"])
    def delete_all_recipes():
        store_backend: RecipeRepository = app.config["RECIPE_STORE"]

        if request.method == "GET":
            return render_template(
                "confirm.html",
                title="Delete All Recipes",
                message="Are you sure you want to delete ALL recipes? This cannot be undone!",
                action=url_for("delete_all_recipes"),
                confirm_label="Delete All",
                active_tab="recipes",
            )

        if not _confirmed():
            return redirect(url_for("recipes"))

        store_backend.delete_all()
        flash("All recipes deleted!", "success")
        return redirect(url_for("recipes"))

    @app.get("/about")
    def about() -> str:
        return render_template("about.html", title="Recipe Book", version=app.config["APP_VERSION"])

    return app


def _log_level(name: str) -> int:
    level = logging.getLevelName(name.strip().upper())
    if isinstance(level, int):
        return level
    return logging.INFO


def _confirmed() -> bool:
    return request.form.get("confirm") == "yes"


__all__ = ["create_app", "NotFoundError", "Recipe", "RecipeStore", "ValidationError"]
