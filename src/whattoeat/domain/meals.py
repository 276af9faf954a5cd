"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID

from whattoeat.domain.recipes import Recipe


class MealType(StrEnum):
    """Slot of the day a meal was eaten in."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class MealDraft:
    """Fields accepted when logging a meal."""

    date: date
    meal_type: MealType
    recipe_id: UUID | None = None
    custom_food_name: str | None = None
    portion: float = 1.0
    notes: str | None = None


@dataclass(frozen=True)
class Meal:
    """Logged meal, optionally joined to the recipe it references."""

    id: UUID
    user_id: UUID
    date: date
    meal_type: MealType
    recipe_id: UUID | None
    custom_food_name: str | None
    portion: float
    notes: str | None
    created_at: datetime
    recipe: Recipe | None = None


MEAL_UPDATABLE_FIELDS = frozenset(
    {"date", "meal_type", "recipe_id", "custom_food_name", "portion", "notes"}
)
