from dataclasses import dataclass, field
from datetime import datetime
from typing import List, Optional


@dataclass
class Recipe:
    """Domain object representing a stored recipe."""

    id: str
    title: str
    ingredients: str
    instructions: str
    pending_edit: bool = False
    created_at: Optional[datetime] = None

    @property
    def ingredient_lines(self) -> List[str]:
        return [line.strip() for line in self.ingredients.splitlines() if line.strip()]


@dataclass
class RecipeDraft:
    """Editable form state owned by the compose page."""

    title: str = ""
    ingredients: str = ""
    instructions: str = ""
    editing_id: Optional[str] = field(default=None)

    @property
    def is_editing(self) -> bool:
        return self.editing_id is not None


__all__ = ["Recipe", "RecipeDraft"]
