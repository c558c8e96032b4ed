from __future__ import annotations

import logging
from dataclasses import replace

from .errors import NotFoundError
from .models import RecipeDraft
from .storage import RecipeRepository

logger = logging.getLogger(__name__)


class ComposeSurface:
    """Draft state behind the "Add Recipe" page.

    The browse page cannot fill this form directly. It flags a recipe on the
    store instead; the surface picks the flag up the next time it observes the
    store (after any change, or when the page is shown) and loads the recipe
    into the draft.
    """

    def __init__(self, store: RecipeRepository) -> None:
        self.store = store
        self.draft = RecipeDraft()
        self._unsubscribe = store.subscribe(self.observe)

    def observe(self, store: RecipeRepository | None = None) -> RecipeDraft:
        if self.draft.is_editing and not self._editing_exists():
            logger.info(
                "Recipe %s was removed while being edited; keeping the form as a new recipe",
                self.draft.editing_id,
            )
            self.draft = replace(self.draft, editing_id=None)

        recipe = self.store.take_pending_edit()
        if recipe is not None:
            self.draft = RecipeDraft(
                title=recipe.title,
                ingredients=recipe.ingredients,
                instructions=recipe.instructions,
                editing_id=recipe.id,
            )
            logger.info("Loaded recipe %s into the compose form", recipe.id)
        return self.current()

    def current(self) -> RecipeDraft:
        return replace(self.draft)

    def submit(self, title: str, ingredients: str = "", instructions: str = "") -> str:
        """Save the form, updating the recipe being edited or adding a new one.

        Returns the id of the saved recipe. On
        :class:`~recipe_book.errors.ValidationError` the submitted values stay in the
        draft so the form can be shown again.
        """

        editing_id = self.draft.editing_id
        self.draft = RecipeDraft(
            title=title,
            ingredients=ingredients,
            instructions=instructions,
            editing_id=editing_id,
        )

        try:
            if editing_id is not None:
                self.store.update(editing_id, title, ingredients, instructions)
                recipe_id = editing_id
            else:
                recipe_id = self.store.add(title, ingredients, instructions)
        except NotFoundError:
            # Keep what was typed; the next save adds it as a new recipe.
            self.draft = replace(self.draft, editing_id=None)
            raise

        self.clear()
        return recipe_id

    def cancel(self) -> None:
        if self.draft.is_editing:
            logger.info("Cancelled editing of recipe %s", self.draft.editing_id)
        self.clear()

    def clear(self) -> None:
        self.draft = RecipeDraft()

    def _editing_exists(self) -> bool:
        try:
            self.store.get(self.draft.editing_id)
        except NotFoundError:
            return False
        return True

    def close(self) -> None:
        self._unsubscribe()


__all__ = ["ComposeSurface"]
