class ValidationError(ValueError):
    """Raised when recipe input is rejected, e.g. a blank title."""


class NotFoundError(KeyError):
    """Raised when an operation references a recipe id that does not exist."""

    def __init__(self, recipe_id: str) -> None:
        super().__init__(recipe_id)
        self.recipe_id = recipe_id

    def __str__(self) -> str:
        return f"Recipe '{self.recipe_id}' does not exist."


__all__ = ["NotFoundError", "ValidationError"]
