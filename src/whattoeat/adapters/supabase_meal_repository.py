"""Supabase repository for logged meals."""

from collections.abc import Mapping
from dataclasses import dataclass
from datetime import date, datetime
from uuid import UUID

from supabase import Client

from whattoeat.adapters.supabase_query import execute
from whattoeat.domain.errors import StorageError
from whattoeat.domain.meals import Meal, MealDraft, MealType
from whattoeat.services.meals import MealRepository

MEALS_TABLE = "meals"


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase-backed meal repository."""

    client: Client

    def create_meal(
        self,
        meal_id: UUID,
        owner_id: UUID,
        draft: MealDraft,
        created_at: datetime,
    ) -> Meal:
        """Insert a meal row and read it back."""
        row = {
            "id": str(meal_id),
            "user_id": str(owner_id),
            **meal_draft_to_row(draft),
            "created_at": created_at.isoformat(),
        }
        inserted = execute(self.client.table(MEALS_TABLE).insert(row), "meal insert")
        if not inserted:
            raise StorageError("Failed to create meal")
        stored = self.get_meal(meal_id, owner_id)
        if stored is None:
            raise StorageError("Created meal could not be read back")
        return stored

    def list_meals(
        self, owner_id: UUID, start: date | None, end: date | None
    ) -> list[Meal]:
        """Return meals within the inclusive date range, newest first."""
        query = self.client.table(MEALS_TABLE).select("*").eq("user_id", str(owner_id))
        if start is not None:
            query = query.gte("date", start.isoformat())
        if end is not None:
            query = query.lte("date", end.isoformat())
        rows = execute(
            query.order("date", desc=True).order("created_at", desc=True),
            "meal list",
        )
        return [parse_meal_row(row) for row in rows]

    def get_meal(self, meal_id: UUID, owner_id: UUID) -> Meal | None:
        """Return an owned meal, if present."""
        rows = execute(
            self.client.table(MEALS_TABLE)
            .select("*")
            .eq("id", str(meal_id))
            .eq("user_id", str(owner_id))
            .limit(1),
            "meal get",
        )
        if not rows:
            return None
        return parse_meal_row(rows[0])

    def update_meal(
        self, meal_id: UUID, owner_id: UUID, changes: Mapping[str, object]
    ) -> Meal | None:
        """Update only the supplied columns."""
        row = meal_changes_to_row(changes)
        if not row:
            return self.get_meal(meal_id, owner_id)
        updated = execute(
            self.client.table(MEALS_TABLE)
            .update(row)
            .eq("id", str(meal_id))
            .eq("user_id", str(owner_id)),
            "meal update",
        )
        if not updated:
            return None
        return self.get_meal(meal_id, owner_id)

    def delete_meal(self, meal_id: UUID, owner_id: UUID) -> bool:
        """Delete an owned meal."""
        deleted = execute(
            self.client.table(MEALS_TABLE)
            .delete()
            .eq("id", str(meal_id))
            .eq("user_id", str(owner_id)),
            "meal delete",
        )
        return bool(deleted)


def meal_draft_to_row(draft: MealDraft) -> dict[str, object]:
    """Map a new meal to column values."""
    return {
        "date": draft.date.isoformat(),
        "meal_type": draft.meal_type.value,
        "recipe_id": str(draft.recipe_id) if draft.recipe_id else None,
        "custom_food_name": _blank_to_none(draft.custom_food_name),
        "portion": float(draft.portion),
        "notes": _blank_to_none(draft.notes),
    }


def meal_changes_to_row(changes: Mapping[str, object]) -> dict[str, object]:
    """Map a partial meal update to the columns it touches, and only those."""
    row: dict[str, object] = {}
    if "date" in changes:
        row["date"] = changes["date"].isoformat()
    if "meal_type" in changes:
        row["meal_type"] = MealType(changes["meal_type"]).value
    if "recipe_id" in changes:
        recipe_id = changes["recipe_id"]
        row["recipe_id"] = str(recipe_id) if recipe_id else None
    if "custom_food_name" in changes:
        row["custom_food_name"] = _blank_to_none(changes["custom_food_name"])
    if "portion" in changes:
        row["portion"] = float(changes["portion"])
    if "notes" in changes:
        row["notes"] = _blank_to_none(changes["notes"])
    return row


def parse_meal_row(row: dict[str, object]) -> Meal:
    """Parse a meal row into a domain model without its recipe."""
    recipe_id = row.get("recipe_id")
    return Meal(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        date=date.fromisoformat(str(row["date"])[:10]),
        meal_type=MealType(row["meal_type"]),
        recipe_id=UUID(str(recipe_id)) if recipe_id else None,
        custom_food_name=row.get("custom_food_name"),
        portion=float(row.get("portion") or 1.0),
        notes=row.get("notes"),
        created_at=datetime.fromisoformat(str(row["created_at"])),
    )


def _blank_to_none(value: object) -> object:
    if isinstance(value, str) and not value.strip():
        return None
    return value
