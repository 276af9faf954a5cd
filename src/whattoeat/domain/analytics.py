"""Domain models for meal analytics."""

from dataclasses import dataclass, field
from datetime import date

from whattoeat.domain.meals import MealType
from whattoeat.domain.recipes import Recipe


@dataclass(frozen=True)
class RecipeUsage:
    """How many logged meals used a recipe."""

    recipe: Recipe
    count: int


@dataclass(frozen=True)
class IngredientFrequency:
    """Portion-weighted usage of an ingredient name."""

    ingredient: str
    frequency: float


@dataclass(frozen=True)
class NutritionTrendPoint:
    """Nutrition eaten in a single meal, scaled by its portion."""

    date: date
    calories: float | None
    protein_g: float | None
    carbs_g: float | None
    fat_g: float | None
    fiber_g: float | None


@dataclass(frozen=True)
class MealAnalytics:
    """Aggregate statistics over a set of meals."""

    total_meals: int
    favorite_recipes: list[RecipeUsage] = field(default_factory=list)
    meals_by_type: dict[MealType, int] = field(default_factory=dict)
    top_ingredients: list[IngredientFrequency] = field(default_factory=list)
    nutrition_trends: list[NutritionTrendPoint] = field(default_factory=list)
