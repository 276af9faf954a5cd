"""Wire serialization of domain models (camelCase JSON)."""

from whattoeat.domain.analytics import MealAnalytics, NutritionTrendPoint
from whattoeat.domain.meals import Meal
from whattoeat.domain.recipes import Ingredient, NutritionInfo, Recipe


def serialize_recipe(recipe: Recipe) -> dict[str, object]:
    return {
        "id": str(recipe.id),
        "name": recipe.name,
        "description": recipe.description,
        "imageUrl": recipe.image_url,
        "isPublic": recipe.is_public,
        "prepTime": recipe.prep_time,
        "cookTime": recipe.cook_time,
        "servings": recipe.servings,
        "difficulty": recipe.difficulty.value if recipe.difficulty else None,
        "category": recipe.category,
        "instructions": list(recipe.instructions),
        "ingredients": [_serialize_ingredient(item) for item in recipe.ingredients],
        "nutrition": _serialize_nutrition(recipe.nutrition),
        "createdAt": recipe.created_at.isoformat(),
        "updatedAt": recipe.updated_at.isoformat(),
    }


def serialize_meal(meal: Meal) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "date": meal.date.isoformat(),
        "mealType": meal.meal_type.value,
        "recipeId": str(meal.recipe_id) if meal.recipe_id else None,
        "recipe": serialize_recipe(meal.recipe) if meal.recipe else None,
        "customFoodName": meal.custom_food_name,
        "portion": meal.portion,
        "notes": meal.notes,
        "createdAt": meal.created_at.isoformat(),
    }


def serialize_analytics(analytics: MealAnalytics) -> dict[str, object]:
    return {
        "totalMeals": analytics.total_meals,
        "favoriteRecipes": [
            {"recipe": serialize_recipe(usage.recipe), "count": usage.count}
            for usage in analytics.favorite_recipes
        ],
        "mealsByType": {
            meal_type.value: count
            for meal_type, count in analytics.meals_by_type.items()
        },
        "topIngredients": [
            {"ingredient": item.ingredient, "frequency": item.frequency}
            for item in analytics.top_ingredients
        ],
        "nutritionTrends": [
            _serialize_trend_point(point) for point in analytics.nutrition_trends
        ],
    }


def _serialize_ingredient(ingredient: Ingredient) -> dict[str, object]:
    return {
        "id": str(ingredient.id) if ingredient.id else None,
        "name": ingredient.name,
        "amount": ingredient.amount,
        "unit": ingredient.unit,
    }


def _serialize_nutrition(nutrition: NutritionInfo | None) -> dict[str, object] | None:
    if nutrition is None:
        return None
    return {
        "calories": nutrition.calories,
        "protein": nutrition.protein_g,
        "carbs": nutrition.carbs_g,
        "fat": nutrition.fat_g,
        "fiber": nutrition.fiber_g,
    }


def _serialize_trend_point(point: NutritionTrendPoint) -> dict[str, object]:
    return {
        "date": point.date.isoformat(),
        "calories": point.calories,
        "protein": point.protein_g,
        "carbs": point.carbs_g,
        "fat": point.fat_g,
        "fiber": point.fiber_g,
    }
