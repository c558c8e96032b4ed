from __future__ import annotations

import logging
import threading
import uuid
from dataclasses import replace
from datetime import datetime, timezone
from typing import Callable, List, Optional

from .errors import NotFoundError, ValidationError
from .models import Recipe
from .storage import RecipeRepository, Subscriber

logger = logging.getLogger(__name__)


def _require_title(title: str) -> None:
    if not title or not title.strip():
        raise ValidationError("Recipe title cannot be empty.")


class RecipeStore(RecipeRepository):
    """In-memory recipe collection, newest first.

    All mutations go through the methods below. Records handed out by
    :meth:`list`, :meth:`get` and :meth:`take_pending_edit` are copies, so
    callers cannot change stored state behind the store's back.
    Subscribers are notified after every successful mutation; a failed call
    leaves the collection untouched and notifies nobody.
    """

    def __init__(self, id_factory: Optional[Callable[[], str]] = None) -> None:
        self._recipes: List[Recipe] = []
        self._subscribers: List[Subscriber] = []
        self._lock = threading.RLock()
        self._new_id = id_factory or (lambda: uuid.uuid4().hex)

    def __len__(self) -> int:
        with self._lock:
            return len(self._recipes)

    def list(self) -> List[Recipe]:
        with self._lock:
            return [replace(recipe) for recipe in self._recipes]

    def get(self, recipe_id: str) -> Recipe:
        with self._lock:
            return replace(self._find(recipe_id))

    def add(self, title: str, ingredients: str = "", instructions: str = "") -> str:
        try:
            _require_title(title)
        except ValidationError:
            logger.warning("Rejected new recipe with blank title")
            raise

        with self._lock:
            recipe_id = self._new_id()
            if any(recipe.id == recipe_id for recipe in self._recipes):
                raise RuntimeError(f"Duplicate recipe id generated: {recipe_id}")
            recipe = Recipe(
                id=recipe_id,
                title=title,
                ingredients=ingredients,
                instructions=instructions,
                created_at=datetime.now(timezone.utc),
            )
            self._recipes.insert(0, recipe)

        logger.info("Added recipe %s", recipe_id)
        self._notify()
        return recipe_id

    def update(
        self,
        recipe_id: str,
        title: str,
        ingredients: str = "",
        instructions: str = "",
    ) -> Recipe:
        with self._lock:
            try:
                recipe = self._find(recipe_id)
                _require_title(title)
            except (NotFoundError, ValidationError) as exc:
                logger.warning("Rejected update of recipe %s: %s", recipe_id, exc)
                raise

            recipe.title = title
            recipe.ingredients = ingredients
            recipe.instructions = instructions
            recipe.pending_edit = False
            updated = replace(recipe)

        logger.info("Updated recipe %s", recipe_id)
        self._notify()
        return updated

    def flag_for_edit(self, recipe_id: str) -> None:
        with self._lock:
            target = self._find(recipe_id)
            for recipe in self._recipes:
                recipe.pending_edit = recipe is target

        logger.info("Flagged recipe %s for editing", recipe_id)
        self._notify()

    def take_pending_edit(self) -> Optional[Recipe]:
        """Return a copy of the flagged recipe and clear every flag.

        Returns ``None`` when nothing is flagged, which also covers a flagged
        recipe that was deleted before anyone came to collect it.
        """

        with self._lock:
            flagged = next((recipe for recipe in self._recipes if recipe.pending_edit), None)
            if flagged is None:
                return None
            taken = replace(flagged, pending_edit=False)
            for recipe in self._recipes:
                recipe.pending_edit = False

        logger.debug("Consumed edit request for recipe %s", taken.id)
        self._notify()
        return taken

    def delete(self, recipe_id: str) -> None:
        with self._lock:
            for index, recipe in enumerate(self._recipes):
                if recipe.id == recipe_id:
                    self._recipes.pop(index)
                    break
            else:
                logger.warning("Rejected delete of unknown recipe %s", recipe_id)
                raise NotFoundError(recipe_id)

        logger.info("Deleted recipe %s", recipe_id)
        self._notify()

    def delete_all(self) -> None:
        with self._lock:
            count = len(self._recipes)
            self._recipes.clear()

        logger.info("Deleted all recipes (%d)", count)
        self._notify()

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        with self._lock:
            self._subscribers.append(callback)

        def unsubscribe() -> None:
            with self._lock:
                if callback in self._subscribers:
                    self._subscribers.remove(callback)

        return unsubscribe

    def _find(self, recipe_id: str) -> Recipe:
        for recipe in self._recipes:
            if recipe.id == recipe_id:
                return recipe
        raise NotFoundError(recipe_id)

    def _notify(self) -> None:
        with self._lock:
            subscribers = list(self._subscribers)
        for callback in subscribers:
            callback(self)


__all__ = ["RecipeStore"]
