"""Supabase repository for recipes and their ingredients."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

from supabase import Client

from whattoeat.adapters.supabase_query import execute
from whattoeat.domain.errors import StorageError
from whattoeat.domain.recipes import (
    Difficulty,
    Ingredient,
    NutritionInfo,
    Recipe,
    RecipeDraft,
)
from whattoeat.services.recipes import RecipeRepository

RECIPES_TABLE = "recipes"
INGREDIENTS_TABLE = "ingredients"

# Scalar recipe fields and the column each is stored in.
_SCALAR_COLUMNS = {
    "name": "name",
    "description": "description",
    "image_url": "image_url",
    "is_public": "is_public",
    "prep_time": "prep_time",
    "cook_time": "cook_time",
    "servings": "servings",
    "category": "category",
}

_NUTRITION_COLUMNS = {
    "calories": "calories",
    "protein_g": "protein_g",
    "carbs_g": "carbs_g",
    "fat_g": "fat_g",
    "fiber_g": "fiber_g",
}


@dataclass
class SupabaseRecipeRepository(RecipeRepository):
    """Supabase-backed recipe repository."""

    client: Client

    def create_recipe(
        self,
        recipe_id: UUID,
        owner_id: UUID,
        draft: RecipeDraft,
        created_at: datetime,
    ) -> Recipe:
        """Insert the recipe and its ingredients, then read it back."""
        row = {
            "id": str(recipe_id),
            "user_id": str(owner_id),
            **recipe_draft_to_row(draft),
            "created_at": created_at.isoformat(),
            "updated_at": created_at.isoformat(),
        }
        inserted = execute(
            self.client.table(RECIPES_TABLE).insert(row), "recipe insert"
        )
        if not inserted:
            raise StorageError("Failed to create recipe")
        self._insert_ingredients(recipe_id, draft.ingredients)
        stored = self.get_recipe(recipe_id, owner_id)
        if stored is None:
            raise StorageError("Created recipe could not be read back")
        return stored

    def list_recipes(self, owner_id: UUID) -> list[Recipe]:
        """Return an owner's recipes, newest first."""
        rows = execute(
            self.client.table(RECIPES_TABLE)
            .select("*")
            .eq("user_id", str(owner_id))
            .order("created_at", desc=True),
            "recipe list",
        )
        return self._with_ingredients(rows)

    def list_recipes_by_ids(
        self, owner_id: UUID, recipe_ids: list[UUID]
    ) -> list[Recipe]:
        """Return the owner's recipes among the given ids."""
        if not recipe_ids:
            return []
        rows = execute(
            self.client.table(RECIPES_TABLE)
            .select("*")
            .eq("user_id", str(owner_id))
            .in_("id", [str(recipe_id) for recipe_id in recipe_ids]),
            "recipe lookup",
        )
        return self._with_ingredients(rows)

    def get_recipe(self, recipe_id: UUID, owner_id: UUID) -> Recipe | None:
        """Return an owned recipe, if present."""
        rows = execute(
            self.client.table(RECIPES_TABLE)
            .select("*")
            .eq("id", str(recipe_id))
            .eq("user_id", str(owner_id))
            .limit(1),
            "recipe get",
        )
        recipes = self._with_ingredients(rows)
        return recipes[0] if recipes else None

    def update_recipe(
        self,
        recipe_id: UUID,
        owner_id: UUID,
        changes: Mapping[str, object],
        updated_at: datetime,
    ) -> Recipe | None:
        """Update only the supplied columns, replacing ingredients if given."""
        row = recipe_changes_to_row(changes)
        row["updated_at"] = updated_at.isoformat()
        updated = execute(
            self.client.table(RECIPES_TABLE)
            .update(row)
            .eq("id", str(recipe_id))
            .eq("user_id", str(owner_id)),
            "recipe update",
        )
        if not updated:
            return None
        if "ingredients" in changes:
            execute(
                self.client.table(INGREDIENTS_TABLE)
                .delete()
                .eq("recipe_id", str(recipe_id)),
                "ingredient delete",
            )
            self._insert_ingredients(recipe_id, changes["ingredients"] or [])
        return self.get_recipe(recipe_id, owner_id)

    def delete_recipe(self, recipe_id: UUID, owner_id: UUID) -> bool:
        """Delete an owned recipe and its ingredients."""
        if self.get_recipe(recipe_id, owner_id) is None:
            return False
        execute(
            self.client.table(INGREDIENTS_TABLE)
            .delete()
            .eq("recipe_id", str(recipe_id)),
            "ingredient delete",
        )
        deleted = execute(
            self.client.table(RECIPES_TABLE)
            .delete()
            .eq("id", str(recipe_id))
            .eq("user_id", str(owner_id)),
            "recipe delete",
        )
        return bool(deleted)

    def list_public_recipes(self) -> list[Recipe]:
        """Return public recipes, newest first."""
        rows = execute(
            self.client.table(RECIPES_TABLE)
            .select("*")
            .eq("is_public", True)
            .order("created_at", desc=True),
            "public recipe list",
        )
        return self._with_ingredients(rows)

    def get_public_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a public recipe, if present."""
        rows = execute(
            self.client.table(RECIPES_TABLE)
            .select("*")
            .eq("id", str(recipe_id))
            .eq("is_public", True)
            .limit(1),
            "public recipe get",
        )
        recipes = self._with_ingredients(rows)
        return recipes[0] if recipes else None

    def _insert_ingredients(self, recipe_id: UUID, ingredients: object) -> None:
        payload = ingredient_rows(recipe_id, ingredients)
        if payload:
            execute(
                self.client.table(INGREDIENTS_TABLE).insert(payload),
                "ingredient insert",
            )

    def _with_ingredients(self, rows: list[dict[str, object]]) -> list[Recipe]:
        if not rows:
            return []
        ingredient_data = execute(
            self.client.table(INGREDIENTS_TABLE)
            .select("*")
            .in_("recipe_id", [str(row["id"]) for row in rows])
            .order("position", desc=False),
            "ingredient list",
        )
        grouped: dict[str, list[dict[str, object]]] = {}
        for ingredient_row in ingredient_data:
            grouped.setdefault(str(ingredient_row["recipe_id"]), []).append(
                ingredient_row
            )
        return [parse_recipe_row(row, grouped.get(str(row["id"]), [])) for row in rows]


def recipe_draft_to_row(draft: RecipeDraft) -> dict[str, object]:
    """Map a new recipe to column values; absent optionals become null."""
    row: dict[str, object] = {
        "name": draft.name.strip(),
        "description": _blank_to_none(draft.description),
        "image_url": _blank_to_none(draft.image_url),
        "is_public": draft.is_public,
        "prep_time": draft.prep_time,
        "cook_time": draft.cook_time,
        "servings": draft.servings,
        "difficulty": draft.difficulty.value if draft.difficulty else None,
        "category": _blank_to_none(draft.category),
        "instructions": list(draft.instructions),
    }
    row.update(_nutrition_columns(draft.nutrition))
    return row


def recipe_changes_to_row(changes: Mapping[str, object]) -> dict[str, object]:
    """Map a partial update to the columns it touches, and only those."""
    row: dict[str, object] = {}
    for field_name, value in changes.items():
        if field_name in _SCALAR_COLUMNS:
            if field_name == "name" and isinstance(value, str):
                value = value.strip()
            elif field_name in {"description", "image_url", "category"}:
                value = _blank_to_none(value)
            elif field_name == "is_public":
                value = bool(value)
            row[_SCALAR_COLUMNS[field_name]] = value
        elif field_name == "difficulty":
            row["difficulty"] = Difficulty(value).value if value is not None else None
        elif field_name == "instructions":
            row["instructions"] = list(value or [])
        elif field_name == "nutrition":
            row.update(_nutrition_columns(value))
    return row


def ingredient_rows(recipe_id: UUID, ingredients: object) -> list[dict[str, object]]:
    """Map ingredient lines to rows, keeping their order in ``position``."""
    rows = []
    for position, ingredient in enumerate(ingredients or []):
        rows.append(
            {
                "recipe_id": str(recipe_id),
                "position": position,
                "name": ingredient.name.strip(),
                "amount": float(ingredient.amount),
                "unit": ingredient.unit,
            }
        )
    return rows


def parse_ingredient_row(row: dict[str, object]) -> Ingredient:
    """Parse an ingredient row into a domain model."""
    return Ingredient(
        id=UUID(str(row["id"])) if row.get("id") else None,
        name=str(row.get("name", "")),
        amount=float(row.get("amount") or 0.0),
        unit=str(row.get("unit") or ""),
    )


def parse_recipe_row(
    row: dict[str, object], ingredient_data: list[dict[str, object]] | None = None
) -> Recipe:
    """Parse a recipe row and its ingredient rows into a domain model."""
    difficulty_raw = row.get("difficulty")
    instructions_raw = row.get("instructions")
    return Recipe(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        description=row.get("description"),
        image_url=row.get("image_url"),
        is_public=bool(row.get("is_public", False)),
        created_at=datetime.fromisoformat(str(row["created_at"])),
        updated_at=datetime.fromisoformat(str(row["updated_at"])),
        prep_time=_optional_int(row.get("prep_time")),
        cook_time=_optional_int(row.get("cook_time")),
        servings=_optional_int(row.get("servings")),
        difficulty=Difficulty(difficulty_raw) if difficulty_raw else None,
        category=row.get("category"),
        instructions=[str(step) for step in instructions_raw]
        if isinstance(instructions_raw, list)
        else [],
        ingredients=[parse_ingredient_row(item) for item in ingredient_data or []],
        nutrition=_parse_nutrition(row),
    )


def _nutrition_columns(nutrition: object) -> dict[str, object]:
    if not isinstance(nutrition, NutritionInfo):
        return dict.fromkeys(_NUTRITION_COLUMNS.values())
    return {
        column: getattr(nutrition, attribute)
        for attribute, column in _NUTRITION_COLUMNS.items()
    }


def _parse_nutrition(row: dict[str, object]) -> NutritionInfo | None:
    values = {
        attribute: float(row[column]) if row.get(column) is not None else None
        for attribute, column in _NUTRITION_COLUMNS.items()
    }
    if all(value is None for value in values.values()):
        return None
    return NutritionInfo(**values)


def _optional_int(value: object) -> int | None:
    if value is None:
        return None
    return int(value)


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value
