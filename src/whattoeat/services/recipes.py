"""Recipe management service."""

import logging
from collections.abc import Mapping
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol
from uuid import UUID, uuid4

from whattoeat.domain.errors import InvalidInputError
from whattoeat.domain.recipes import RECIPE_UPDATABLE_FIELDS, Recipe, RecipeDraft

_logger = logging.getLogger(__name__)


class RecipeRepository(Protocol):
    """Persistence interface for recipes and their ingredients."""

    def create_recipe(
        self,
        recipe_id: UUID,
        owner_id: UUID,
        draft: RecipeDraft,
        created_at: datetime,
    ) -> Recipe:
        """Persist a recipe and return the stored record."""

    def list_recipes(self, owner_id: UUID) -> list[Recipe]:
        """Return an owner's recipes, newest first."""

    def list_recipes_by_ids(
        self, owner_id: UUID, recipe_ids: list[UUID]
    ) -> list[Recipe]:
        """Return the owner's recipes among the given ids."""

    def get_recipe(self, recipe_id: UUID, owner_id: UUID) -> Recipe | None:
        """Return an owned recipe, if present."""

    def update_recipe(
        self,
        recipe_id: UUID,
        owner_id: UUID,
        changes: Mapping[str, object],
        updated_at: datetime,
    ) -> Recipe | None:
        """Apply the given field changes and return the stored record."""

    def delete_recipe(self, recipe_id: UUID, owner_id: UUID) -> bool:
        """Delete an owned recipe, returning whether it existed."""

    def list_public_recipes(self) -> list[Recipe]:
        """Return all public recipes, newest first."""

    def get_public_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a public recipe, if present."""


@dataclass
class RecipeService:
    """Application service for owner-scoped recipe operations."""

    repository: RecipeRepository

    def create_recipe(self, owner_id: UUID, draft: RecipeDraft) -> Recipe:
        """Create a recipe with a fresh id and matching timestamps."""
        _require_name(draft.name)
        now = datetime.now(tz=UTC)
        return self.repository.create_recipe(
            recipe_id=uuid4(), owner_id=owner_id, draft=draft, created_at=now
        )

    def list_recipes(self, owner_id: UUID) -> list[Recipe]:
        """Return the owner's recipes, newest first."""
        return self.repository.list_recipes(owner_id)

    def get_recipe(self, recipe_id: UUID, owner_id: UUID) -> Recipe | None:
        """Return an owned recipe."""
        return self.repository.get_recipe(recipe_id, owner_id)

    def update_recipe(
        self, recipe_id: UUID, owner_id: UUID, changes: Mapping[str, object]
    ) -> Recipe | None:
        """Apply a partial update; fields absent from ``changes`` are kept."""
        unknown = set(changes) - RECIPE_UPDATABLE_FIELDS
        if unknown:
            raise InvalidInputError(
                f"Unknown recipe fields: {', '.join(sorted(unknown))}"
            )
        if "name" in changes:
            _require_name(changes["name"])
        existing = self.repository.get_recipe(recipe_id, owner_id)
        if existing is None:
            return None
        return self.repository.update_recipe(
            recipe_id,
            owner_id,
            changes,
            updated_at=next_timestamp(existing.updated_at),
        )

    def delete_recipe(self, recipe_id: UUID, owner_id: UUID) -> bool:
        """Delete an owned recipe; meals that used it keep a dangling id."""
        return self.repository.delete_recipe(recipe_id, owner_id)

    def list_public_recipes(self) -> list[Recipe]:
        """Return every recipe flagged public."""
        return self.repository.list_public_recipes()

    def get_public_recipe(self, recipe_id: UUID) -> Recipe | None:
        """Return a public recipe by id."""
        return self.repository.get_public_recipe(recipe_id)

    def import_public_recipe(self, recipe_id: UUID, owner_id: UUID) -> Recipe | None:
        """Clone a public recipe into the owner's private collection."""
        source = self.repository.get_public_recipe(recipe_id)
        if source is None:
            return None
        imported = self.create_recipe(
            owner_id,
            RecipeDraft(
                name=source.name,
                description=source.description,
                image_url=source.image_url,
                is_public=False,
            ),
        )
        _logger.info(
            "Imported public recipe",
            extra={"source_id": str(source.id), "recipe_id": str(imported.id)},
        )
        return imported


def next_timestamp(previous: datetime) -> datetime:
    """Return the current time, nudged forward so it is after ``previous``."""
    now = datetime.now(tz=UTC)
    if now > previous:
        return now
    return previous + timedelta(microseconds=1)


def _require_name(value: object) -> None:
    if not isinstance(value, str) or not value.strip():
        raise InvalidInputError("Recipe name is required")
