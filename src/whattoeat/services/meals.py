"""Meal logging service."""

from collections.abc import Mapping
from dataclasses import dataclass, replace
from datetime import UTC, date, datetime
from typing import Protocol
from uuid import UUID, uuid4

from whattoeat.domain.errors import InvalidInputError
from whattoeat.domain.meals import MEAL_UPDATABLE_FIELDS, Meal, MealDraft
from whattoeat.services.recipes import RecipeRepository


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def create_meal(
        self,
        meal_id: UUID,
        owner_id: UUID,
        draft: MealDraft,
        created_at: datetime,
    ) -> Meal:
        """Persist a meal and return the stored record."""

    def list_meals(
        self, owner_id: UUID, start: date | None, end: date | None
    ) -> list[Meal]:
        """Return meals in the inclusive date range, newest first."""

    def get_meal(self, meal_id: UUID, owner_id: UUID) -> Meal | None:
        """Return an owned meal, if present."""

    def update_meal(
        self, meal_id: UUID, owner_id: UUID, changes: Mapping[str, object]
    ) -> Meal | None:
        """Apply the given field changes and return the stored record."""

    def delete_meal(self, meal_id: UUID, owner_id: UUID) -> bool:
        """Delete an owned meal, returning whether it existed."""


@dataclass
class MealService:
    """Service that validates meals and joins them to their recipes."""

    repository: MealRepository
    recipe_repository: RecipeRepository

    def create_meal(self, owner_id: UUID, draft: MealDraft) -> Meal:
        """Log a meal for the owner."""
        self._validate(
            owner_id,
            recipe_id=draft.recipe_id,
            custom_food_name=draft.custom_food_name,
            portion=draft.portion,
            check_recipe=True,
        )
        meal = self.repository.create_meal(
            meal_id=uuid4(),
            owner_id=owner_id,
            draft=draft,
            created_at=datetime.now(tz=UTC),
        )
        return self._attach_recipes(owner_id, [meal])[0]

    def list_meals(
        self, owner_id: UUID, start: date | None = None, end: date | None = None
    ) -> list[Meal]:
        """Return the owner's meals in range with recipes attached."""
        meals = self.repository.list_meals(owner_id, start, end)
        return self._attach_recipes(owner_id, meals)

    def get_meal(self, meal_id: UUID, owner_id: UUID) -> Meal | None:
        """Return an owned meal with its recipe attached."""
        meal = self.repository.get_meal(meal_id, owner_id)
        if meal is None:
            return None
        return self._attach_recipes(owner_id, [meal])[0]

    def update_meal(
        self, meal_id: UUID, owner_id: UUID, changes: Mapping[str, object]
    ) -> Meal | None:
        """Apply a partial update; fields absent from ``changes`` are kept."""
        unknown = set(changes) - MEAL_UPDATABLE_FIELDS
        if unknown:
            raise InvalidInputError(f"Unknown meal fields: {', '.join(sorted(unknown))}")
        for required in ("date", "meal_type", "portion"):
            if required in changes and changes[required] is None:
                raise InvalidInputError(f"Meal {required} cannot be cleared")
        existing = self.repository.get_meal(meal_id, owner_id)
        if existing is None:
            return None
        self._validate(
            owner_id,
            recipe_id=changes.get("recipe_id", existing.recipe_id),
            custom_food_name=changes.get(
                "custom_food_name", existing.custom_food_name
            ),
            portion=changes.get("portion", existing.portion),
            check_recipe="recipe_id" in changes,
        )
        updated = self.repository.update_meal(meal_id, owner_id, changes)
        if updated is None:
            return None
        return self._attach_recipes(owner_id, [updated])[0]

    def delete_meal(self, meal_id: UUID, owner_id: UUID) -> bool:
        """Delete an owned meal."""
        return self.repository.delete_meal(meal_id, owner_id)

    def _validate(
        self,
        owner_id: UUID,
        *,
        recipe_id: object,
        custom_food_name: object,
        portion: object,
        check_recipe: bool,
    ) -> None:
        has_recipe = recipe_id is not None
        has_custom = isinstance(custom_food_name, str) and bool(
            custom_food_name.strip()
        )
        if has_recipe == has_custom:
            raise InvalidInputError(
                "A meal needs either a recipe or a custom food name, not both"
            )
        if not isinstance(portion, int | float) or portion <= 0:
            raise InvalidInputError("Portion must be greater than zero")
        if check_recipe and has_recipe:
            if not isinstance(recipe_id, UUID):
                raise InvalidInputError("Recipe id must be a UUID")
            if self.recipe_repository.get_recipe(recipe_id, owner_id) is None:
                raise InvalidInputError("Recipe not found for this meal")

    def _attach_recipes(self, owner_id: UUID, meals: list[Meal]) -> list[Meal]:
        """Join meals to their recipes; unresolvable references stay empty."""
        recipe_ids = list(
            dict.fromkeys(meal.recipe_id for meal in meals if meal.recipe_id)
        )
        if not recipe_ids:
            return meals
        recipes = {
            recipe.id: recipe
            for recipe in self.recipe_repository.list_recipes_by_ids(
                owner_id, recipe_ids
            )
        }
        return [
            replace(meal, recipe=recipes.get(meal.recipe_id))
            if meal.recipe_id
            else meal
            for meal in meals
        ]
