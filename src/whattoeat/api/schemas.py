"""Request payload models for the JSON API."""

import datetime as dt
from typing import TypeVar
from uuid import UUID

from fastapi import Request
from fastapi.exceptions import RequestValidationError
from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from whattoeat.domain.errors import InvalidInputError
from whattoeat.domain.meals import MealDraft, MealType
from whattoeat.domain.recipes import Difficulty, Ingredient, NutritionInfo, RecipeDraft


class _ApiModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        str_strip_whitespace=True,
    )


class IngredientPayload(_ApiModel):
    """Ingredient line in a recipe payload."""

    name: str = Field(min_length=1)
    amount: float = Field(default=0.0, ge=0)
    unit: str = ""

    def to_domain(self) -> Ingredient:
        return Ingredient(name=self.name, amount=self.amount, unit=self.unit)


class NutritionPayload(_ApiModel):
    """Per-serving nutrition, grams for macros."""

    calories: float | None = Field(default=None, ge=0)
    protein: float | None = Field(default=None, ge=0)
    carbs: float | None = Field(default=None, ge=0)
    fat: float | None = Field(default=None, ge=0)
    fiber: float | None = Field(default=None, ge=0)

    def to_domain(self) -> NutritionInfo:
        return NutritionInfo(
            calories=self.calories,
            protein_g=self.protein,
            carbs_g=self.carbs,
            fat_g=self.fat,
            fiber_g=self.fiber,
        )


class RecipeCreate(_ApiModel):
    """Body of POST /api/recipes."""

    name: str = Field(min_length=1)
    description: str | None = None
    image_url: str | None = None
    is_public: bool = False
    prep_time: int | None = Field(default=None, ge=0)
    cook_time: int | None = Field(default=None, ge=0)
    servings: int | None = Field(default=None, ge=1)
    difficulty: Difficulty | None = None
    category: str | None = None
    instructions: list[str] = Field(default_factory=list)
    ingredients: list[IngredientPayload] = Field(default_factory=list)
    nutrition: NutritionPayload | None = None

    @field_validator("instructions")
    @classmethod
    def _steps_not_blank(cls, steps: list[str]) -> list[str]:
        return _check_steps(steps)

    def to_draft(self) -> RecipeDraft:
        return RecipeDraft(
            name=self.name,
            description=self.description,
            image_url=self.image_url,
            is_public=self.is_public,
            prep_time=self.prep_time,
            cook_time=self.cook_time,
            servings=self.servings,
            difficulty=self.difficulty,
            category=self.category,
            instructions=list(self.instructions),
            ingredients=[item.to_domain() for item in self.ingredients],
            nutrition=self.nutrition.to_domain() if self.nutrition else None,
        )


class RecipeUpdate(_ApiModel):
    """Body of PUT /api/recipes/{id}; only supplied fields are applied."""

    name: str | None = Field(default=None, min_length=1)
    description: str | None = None
    image_url: str | None = None
    is_public: bool | None = None
    prep_time: int | None = Field(default=None, ge=0)
    cook_time: int | None = Field(default=None, ge=0)
    servings: int | None = Field(default=None, ge=1)
    difficulty: Difficulty | None = None
    category: str | None = None
    instructions: list[str] | None = None
    ingredients: list[IngredientPayload] | None = None
    nutrition: NutritionPayload | None = None

    @field_validator("instructions")
    @classmethod
    def _steps_not_blank(cls, steps: list[str] | None) -> list[str] | None:
        return _check_steps(steps) if steps is not None else None

    @model_validator(mode="after")
    def _required_fields_not_cleared(self) -> "RecipeUpdate":
        for required in ("name", "is_public"):
            if required in self.model_fields_set and getattr(self, required) is None:
                raise ValueError(f"{to_camel(required)} cannot be null")
        return self

    def to_changes(self) -> dict[str, object]:
        """Return the supplied fields only, converted to domain values."""
        changes: dict[str, object] = {}
        for name in self.model_fields_set:
            value = getattr(self, name)
            if name == "ingredients" and value is not None:
                value = [item.to_domain() for item in value]
            elif name == "nutrition" and value is not None:
                value = value.to_domain()
            elif name == "instructions" and value is None:
                value = []
            changes[name] = value
        return changes


class MealCreate(_ApiModel):
    """Body of POST /api/meals."""

    date: dt.date
    meal_type: MealType
    recipe_id: UUID | None = None
    custom_food_name: str | None = None
    portion: float = Field(default=1.0, gt=0)
    notes: str | None = None

    @model_validator(mode="after")
    def _recipe_or_custom_food(self) -> "MealCreate":
        has_recipe = self.recipe_id is not None
        has_custom = bool(self.custom_food_name)
        if has_recipe == has_custom:
            raise ValueError("Provide either recipeId or customFoodName")
        return self

    def to_draft(self) -> MealDraft:
        return MealDraft(
            date=self.date,
            meal_type=self.meal_type,
            recipe_id=self.recipe_id,
            custom_food_name=self.custom_food_name,
            portion=self.portion,
            notes=self.notes,
        )


class MealUpdate(_ApiModel):
    """Body of PUT /api/meals/{id}; only supplied fields are applied."""

    date: dt.date | None = None
    meal_type: MealType | None = None
    recipe_id: UUID | None = None
    custom_food_name: str | None = None
    portion: float | None = Field(default=None, gt=0)
    notes: str | None = None

    def to_changes(self) -> dict[str, object]:
        """Return the supplied fields only."""
        return {name: getattr(self, name) for name in self.model_fields_set}


def _check_steps(steps: list[str]) -> list[str]:
    if any(not step for step in steps):
        raise ValueError("Instruction steps cannot be empty")
    return steps


PayloadT = TypeVar("PayloadT", bound=BaseModel)


async def read_payload(request: Request, model: type[PayloadT]) -> PayloadT:
    """Parse the JSON body into ``model``; call only once the caller is known."""
    try:
        data = await request.json()
    except ValueError as exc:
        raise InvalidInputError("Request body must be valid JSON") from exc
    try:
        return model.model_validate(data)
    except ValidationError as exc:
        raise RequestValidationError(exc.errors(include_url=False)) from exc
