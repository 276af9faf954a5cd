"""Recipe endpoints, private and public."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from whattoeat.api.auth import require_owner
from whattoeat.api.errors import success
from whattoeat.api.schemas import RecipeCreate, RecipeUpdate, read_payload
from whattoeat.api.serializers import serialize_recipe
from whattoeat.domain.errors import NotFoundError

if TYPE_CHECKING:
    from whattoeat.containers import AppContainer

router = APIRouter(prefix="/api/recipes", tags=["recipes"])
public_router = APIRouter(prefix="/api/public/recipes", tags=["public-recipes"])

RECIPE_NOT_FOUND = "Recipe not found"


@router.get("")
async def list_recipes(
    request: Request, owner_id: UUID = Depends(require_owner)
) -> dict[str, object]:
    """Return the caller's recipes, newest first."""
    container: AppContainer = request.app.state.container
    recipes = container.recipe_service.list_recipes(owner_id)
    return success([serialize_recipe(recipe) for recipe in recipes])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_recipe(
    request: Request, owner_id: UUID = Depends(require_owner)
) -> dict[str, object]:
    """Create a recipe for the caller."""
    container: AppContainer = request.app.state.container
    payload = await read_payload(request, RecipeCreate)
    recipe = container.recipe_service.create_recipe(owner_id, payload.to_draft())
    return success(serialize_recipe(recipe))


@router.get("/{recipe_id}")
async def get_recipe(
    recipe_id: UUID, request: Request, owner_id: UUID = Depends(require_owner)
) -> dict[str, object]:
    """Return one of the caller's recipes."""
    container: AppContainer = request.app.state.container
    recipe = container.recipe_service.get_recipe(recipe_id, owner_id)
    if recipe is None:
        raise NotFoundError(RECIPE_NOT_FOUND)
    return success(serialize_recipe(recipe))


@router.put("/{recipe_id}")
async def update_recipe(
    recipe_id: UUID, request: Request, owner_id: UUID = Depends(require_owner)
) -> dict[str, object]:
    """Apply a partial update to one of the caller's recipes."""
    container: AppContainer = request.app.state.container
    payload = await read_payload(request, RecipeUpdate)
    recipe = container.recipe_service.update_recipe(
        recipe_id, owner_id, payload.to_changes()
    )
    if recipe is None:
        raise NotFoundError(RECIPE_NOT_FOUND)
    return success(serialize_recipe(recipe))


@router.delete("/{recipe_id}")
async def delete_recipe(
    recipe_id: UUID, request: Request, owner_id: UUID = Depends(require_owner)
) -> dict[str, object]:
    """Delete one of the caller's recipes."""
    container: AppContainer = request.app.state.container
    if not container.recipe_service.delete_recipe(recipe_id, owner_id):
        raise NotFoundError(RECIPE_NOT_FOUND)
    return success({"id": str(recipe_id)})


@public_router.get("")
async def list_public_recipes(request: Request) -> dict[str, object]:
    """Return every public recipe; no sign-in needed."""
    container: AppContainer = request.app.state.container
    recipes = container.recipe_service.list_public_recipes()
    return success([serialize_recipe(recipe) for recipe in recipes])


@public_router.get("/{recipe_id}")
async def get_public_recipe(recipe_id: UUID, request: Request) -> dict[str, object]:
    """Return a public recipe; no sign-in needed."""
    container: AppContainer = request.app.state.container
    recipe = container.recipe_service.get_public_recipe(recipe_id)
    if recipe is None:
        raise NotFoundError(RECIPE_NOT_FOUND)
    return success(serialize_recipe(recipe))


@public_router.post("/{recipe_id}/import", status_code=status.HTTP_201_CREATED)
async def import_public_recipe(
    recipe_id: UUID, request: Request, owner_id: UUID = Depends(require_owner)
) -> dict[str, object]:
    """Copy a public recipe into the caller's private collection."""
    container: AppContainer = request.app.state.container
    recipe = container.recipe_service.import_public_recipe(recipe_id, owner_id)
    if recipe is None:
        raise NotFoundError(RECIPE_NOT_FOUND)
    return success(serialize_recipe(recipe))
