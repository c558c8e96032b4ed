from __future__ import annotations

from typing import Callable, List, Optional, Protocol

from .models import Recipe

Subscriber = Callable[["RecipeRepository"], None]


class RecipeRepository(Protocol):
    """Protocol describing the behaviour required by the web layer."""

    def __len__(self) -> int:
        """Return the number of stored recipes."""

    def list(self) -> List[Recipe]:
        """Return the stored recipes ordered newest first."""

    def get(self, recipe_id: str) -> Recipe:
        """Return a single recipe or raise :class:`NotFoundError` if missing."""

    def add(self, title: str, ingredients: str, instructions: str) -> str:
        """Store a new recipe at the front of the collection and return its id."""

    def update(
        self,
        recipe_id: str,
        title: str,
        ingredients: str,
        instructions: str,
    ) -> Recipe:
        """Replace the fields of an existing recipe and return the new representation."""

    def flag_for_edit(self, recipe_id: str) -> None:
        """Mark a recipe as the one the compose page should load next."""

    def take_pending_edit(self) -> Optional[Recipe]:
        """Return the recipe flagged for editing, clearing the flag."""

    def delete(self, recipe_id: str) -> None:
        """Remove a recipe."""

    def delete_all(self) -> None:
        """Remove every recipe."""

    def subscribe(self, callback: Subscriber) -> Callable[[], None]:
        """Call ``callback`` after every change; return a function that unsubscribes."""


__all__ = ["RecipeRepository", "Subscriber"]
