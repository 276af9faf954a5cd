"""Domain models for recipes."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class Difficulty(StrEnum):
    """How hard a recipe is to cook."""

    EASY = "easy"
    MEDIUM = "medium"
    HARD = "hard"


@dataclass(frozen=True)
class Ingredient:
    """Ingredient line owned by a single recipe."""

    name: str
    amount: float
    unit: str
    id: UUID | None = None


@dataclass(frozen=True)
class NutritionInfo:
    """Per-serving nutrition snapshot."""

    calories: float | None = None
    protein_g: float | None = None
    carbs_g: float | None = None
    fat_g: float | None = None
    fiber_g: float | None = None


@dataclass(frozen=True)
class RecipeDraft:
    """Fields accepted when creating a recipe."""

    name: str
    description: str | None = None
    image_url: str | None = None
    is_public: bool = False
    prep_time: int | None = None
    cook_time: int | None = None
    servings: int | None = None
    difficulty: Difficulty | None = None
    category: str | None = None
    instructions: list[str] = field(default_factory=list)
    ingredients: list[Ingredient] = field(default_factory=list)
    nutrition: NutritionInfo | None = None


@dataclass(frozen=True)
class Recipe:
    """Recipe as stored for an owner."""

    id: UUID
    user_id: UUID
    name: str
    description: str | None
    image_url: str | None
    is_public: bool
    created_at: datetime
    updated_at: datetime
    prep_time: int | None = None
    cook_time: int | None = None
    servings: int | None = None
    difficulty: Difficulty | None = None
    category: str | None = None
    instructions: list[str] = field(default_factory=list)
    ingredients: list[Ingredient] = field(default_factory=list)
    nutrition: NutritionInfo | None = None


# Fields a partial update may touch.
RECIPE_UPDATABLE_FIELDS = frozenset(
    {
        "name",
        "description",
        "image_url",
        "is_public",
        "prep_time",
        "cook_time",
        "servings",
        "difficulty",
        "category",
        "instructions",
        "ingredients",
        "nutrition",
    }
)
