"""Analytics over a user's logged meals."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from whattoeat.domain.analytics import (
    IngredientFrequency,
    MealAnalytics,
    NutritionTrendPoint,
    RecipeUsage,
)
from whattoeat.domain.meals import Meal, MealType
from whattoeat.domain.recipes import NutritionInfo, Recipe
from whattoeat.services.meals import MealService

TOP_LIMIT = 10


@dataclass
class AnalyticsService:
    """Computes meal statistics on demand; nothing is cached."""

    meal_service: MealService

    def get_analytics(
        self, owner_id: UUID, start: date | None = None, end: date | None = None
    ) -> MealAnalytics:
        """Return analytics for the owner's meals in the inclusive range."""
        meals = self.meal_service.list_meals(owner_id, start, end)
        return aggregate_meals(meals)


def aggregate_meals(meals: list[Meal], limit: int = TOP_LIMIT) -> MealAnalytics:
    """Aggregate meals in a single pass.

    Recipe usage is a plain count per meal. Ingredient frequency adds the
    meal portion, so half a recipe contributes half the weight. Meals whose
    recipe could not be resolved only count toward the total and the
    per-type breakdown.
    """
    recipe_counts: dict[UUID, int] = {}
    recipes: dict[UUID, Recipe] = {}
    meals_by_type: dict[MealType, int] = {}
    ingredient_totals: dict[str, float] = {}
    ingredient_names: dict[str, str] = {}
    trend: list[NutritionTrendPoint] = []

    for meal in meals:
        meals_by_type[meal.meal_type] = meals_by_type.get(meal.meal_type, 0) + 1
        recipe = meal.recipe
        if recipe is None:
            continue
        recipes.setdefault(recipe.id, recipe)
        recipe_counts[recipe.id] = recipe_counts.get(recipe.id, 0) + 1
        for ingredient in recipe.ingredients:
            key = ingredient.name.strip().casefold()
            if not key:
                continue
            ingredient_names.setdefault(key, ingredient.name.strip())
            ingredient_totals[key] = ingredient_totals.get(key, 0.0) + meal.portion
        if recipe.nutrition is not None:
            trend.append(_trend_point(meal.date, recipe.nutrition, meal.portion))

    # sorted() is stable, so ties keep first-seen order.
    favorite_recipes = [
        RecipeUsage(recipe=recipes[recipe_id], count=count)
        for recipe_id, count in sorted(
            recipe_counts.items(), key=lambda item: item[1], reverse=True
        )[:limit]
    ]
    top_ingredients = [
        IngredientFrequency(ingredient=ingredient_names[key], frequency=total)
        for key, total in sorted(
            ingredient_totals.items(), key=lambda item: item[1], reverse=True
        )[:limit]
    ]
    return MealAnalytics(
        total_meals=len(meals),
        favorite_recipes=favorite_recipes,
        meals_by_type=meals_by_type,
        top_ingredients=top_ingredients,
        nutrition_trends=sorted(trend, key=lambda point: point.date),
    )


def _trend_point(
    day: date, nutrition: NutritionInfo, portion: float
) -> NutritionTrendPoint:
    return NutritionTrendPoint(
        date=day,
        calories=_scale(nutrition.calories, portion),
        protein_g=_scale(nutrition.protein_g, portion),
        carbs_g=_scale(nutrition.carbs_g, portion),
        fat_g=_scale(nutrition.fat_g, portion),
        fiber_g=_scale(nutrition.fiber_g, portion),
    )


def _scale(value: float | None, portion: float) -> float | None:
    if value is None:
        return None
    return value * portion
