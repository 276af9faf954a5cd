"""Tests for meal service."""

from datetime import date

import pytest

from whattoeat.domain.errors import InvalidInputError
from whattoeat.domain.meals import MealDraft, MealType
from whattoeat.domain.recipes import RecipeDraft


def _recipe(recipe_service, owner_id, name="Chili"):
    return recipe_service.create_recipe(owner_id, RecipeDraft(name=name))


def test_create_meal_attaches_recipe(meal_service, recipe_service, owner_id) -> None:
    recipe = _recipe(recipe_service, owner_id)

    meal = meal_service.create_meal(
        owner_id,
        MealDraft(
            date=date(2024, 5, 1),
            meal_type=MealType.DINNER,
            recipe_id=recipe.id,
            portion=0.5,
            notes="leftovers",
        ),
    )

    assert meal.recipe == recipe
    assert meal.portion == 0.5
    assert meal.custom_food_name is None
    assert meal_service.get_meal(meal.id, owner_id) == meal


def test_create_custom_food_meal(meal_service, owner_id) -> None:
    meal = meal_service.create_meal(
        owner_id,
        MealDraft(
            date=date(2024, 5, 1),
            meal_type=MealType.SNACK,
            custom_food_name="Apple",
        ),
    )

    assert meal.recipe_id is None
    assert meal.recipe is None
    assert meal.custom_food_name == "Apple"
    assert meal.portion == 1.0


@pytest.mark.parametrize(
    ("custom_food_name", "with_recipe"),
    [(None, False), ("Apple", True), ("   ", False)],
)
def test_create_meal_needs_exactly_one_food_source(
    meal_service, recipe_service, owner_id, custom_food_name, with_recipe
) -> None:
    recipe_id = _recipe(recipe_service, owner_id).id if with_recipe else None

    with pytest.raises(InvalidInputError):
        meal_service.create_meal(
            owner_id,
            MealDraft(
                date=date(2024, 5, 1),
                meal_type=MealType.LUNCH,
                recipe_id=recipe_id,
                custom_food_name=custom_food_name,
            ),
        )


def test_create_meal_rejects_foreign_recipe(
    meal_service, recipe_service, owner_id, other_owner_id
) -> None:
    foreign = _recipe(recipe_service, other_owner_id)

    with pytest.raises(InvalidInputError):
        meal_service.create_meal(
            owner_id,
            MealDraft(
                date=date(2024, 5, 1),
                meal_type=MealType.LUNCH,
                recipe_id=foreign.id,
            ),
        )


@pytest.mark.parametrize("portion", [0, -1.5])
def test_create_meal_rejects_non_positive_portion(
    meal_service, owner_id, portion
) -> None:
    with pytest.raises(InvalidInputError):
        meal_service.create_meal(
            owner_id,
            MealDraft(
                date=date(2024, 5, 1),
                meal_type=MealType.LUNCH,
                custom_food_name="Soup",
                portion=portion,
            ),
        )


def test_list_meals_filters_inclusive_range_newest_first(
    meal_service, owner_id, other_owner_id
) -> None:
    for day in (1, 2, 3, 4):
        meal_service.create_meal(
            owner_id,
            MealDraft(
                date=date(2024, 5, day),
                meal_type=MealType.LUNCH,
                custom_food_name=f"Day {day}",
            ),
        )
    meal_service.create_meal(
        other_owner_id,
        MealDraft(date=date(2024, 5, 2), meal_type=MealType.LUNCH, custom_food_name="X"),
    )

    in_range = meal_service.list_meals(owner_id, date(2024, 5, 2), date(2024, 5, 3))
    from_start = meal_service.list_meals(owner_id, start=date(2024, 5, 3))
    until_end = meal_service.list_meals(owner_id, end=date(2024, 5, 1))

    assert [meal.custom_food_name for meal in in_range] == ["Day 3", "Day 2"]
    assert [meal.date.day for meal in from_start] == [4, 3]
    assert [meal.date.day for meal in until_end] == [1]
    assert len(meal_service.list_meals(owner_id)) == 4


def test_meal_keeps_dangling_recipe_id_after_recipe_delete(
    meal_service, recipe_service, owner_id
) -> None:
    recipe = _recipe(recipe_service, owner_id)
    meal = meal_service.create_meal(
        owner_id,
        MealDraft(date=date(2024, 5, 1), meal_type=MealType.DINNER, recipe_id=recipe.id),
    )

    recipe_service.delete_recipe(recipe.id, owner_id)
    fetched = meal_service.get_meal(meal.id, owner_id)

    assert fetched is not None
    assert fetched.recipe_id == recipe.id
    assert fetched.recipe is None


def test_update_meal_only_touches_supplied_fields(meal_service, owner_id) -> None:
    meal = meal_service.create_meal(
        owner_id,
        MealDraft(
            date=date(2024, 5, 1),
            meal_type=MealType.BREAKFAST,
            custom_food_name="Toast",
            notes="with jam",
        ),
    )

    updated = meal_service.update_meal(meal.id, owner_id, {"portion": 2.0})

    assert updated is not None
    assert updated.portion == 2.0
    assert updated.notes == "with jam"
    assert updated.meal_type is MealType.BREAKFAST
    assert updated.date == date(2024, 5, 1)


def test_update_meal_switches_food_source(
    meal_service, recipe_service, owner_id
) -> None:
    recipe = _recipe(recipe_service, owner_id)
    meal = meal_service.create_meal(
        owner_id,
        MealDraft(date=date(2024, 5, 1), meal_type=MealType.LUNCH, custom_food_name="Soup"),
    )

    with pytest.raises(InvalidInputError):
        meal_service.update_meal(meal.id, owner_id, {"recipe_id": recipe.id})

    updated = meal_service.update_meal(
        meal.id, owner_id, {"recipe_id": recipe.id, "custom_food_name": None}
    )

    assert updated is not None
    assert updated.recipe == recipe
    assert updated.custom_food_name is None


def test_update_meal_rejects_cleared_required_fields(meal_service, owner_id) -> None:
    meal = meal_service.create_meal(
        owner_id,
        MealDraft(date=date(2024, 5, 1), meal_type=MealType.LUNCH, custom_food_name="Soup"),
    )

    with pytest.raises(InvalidInputError):
        meal_service.update_meal(meal.id, owner_id, {"meal_type": None})
    with pytest.raises(InvalidInputError):
        meal_service.update_meal(meal.id, owner_id, {"portion": 0})


def test_update_and_delete_foreign_meal_are_not_found(
    meal_service, owner_id, other_owner_id
) -> None:
    meal = meal_service.create_meal(
        owner_id,
        MealDraft(date=date(2024, 5, 1), meal_type=MealType.LUNCH, custom_food_name="Soup"),
    )

    assert meal_service.update_meal(meal.id, other_owner_id, {"notes": "x"}) is None
    assert meal_service.delete_meal(meal.id, other_owner_id) is False
    assert meal_service.delete_meal(meal.id, owner_id) is True
    assert meal_service.get_meal(meal.id, owner_id) is None
