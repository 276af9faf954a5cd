"""Meal log endpoints."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request, status

from whattoeat.api.auth import require_owner
from whattoeat.api.errors import success
from whattoeat.api.schemas import MealCreate, MealUpdate, read_payload
from whattoeat.api.serializers import serialize_meal
from whattoeat.domain.errors import NotFoundError

if TYPE_CHECKING:
    from whattoeat.containers import AppContainer

router = APIRouter(prefix="/api/meals", tags=["meals"])

MEAL_NOT_FOUND = "Meal not found"


@router.get("")
async def list_meals(
    request: Request,
    owner_id: UUID = Depends(require_owner),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
) -> dict[str, object]:
    """Return the caller's meals within an optional inclusive date range."""
    container: AppContainer = request.app.state.container
    meals = container.meal_service.list_meals(owner_id, start_date, end_date)
    return success([serialize_meal(meal) for meal in meals])


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_meal(
    request: Request, owner_id: UUID = Depends(require_owner)
) -> dict[str, object]:
    """Log a meal for the caller."""
    container: AppContainer = request.app.state.container
    payload = await read_payload(request, MealCreate)
    meal = container.meal_service.create_meal(owner_id, payload.to_draft())
    return success(serialize_meal(meal))


@router.get("/{meal_id}")
async def get_meal(
    meal_id: UUID, request: Request, owner_id: UUID = Depends(require_owner)
) -> dict[str, object]:
    """Return one of the caller's meals."""
    container: AppContainer = request.app.state.container
    meal = container.meal_service.get_meal(meal_id, owner_id)
    if meal is None:
        raise NotFoundError(MEAL_NOT_FOUND)
    return success(serialize_meal(meal))


@router.put("/{meal_id}")
async def update_meal(
    meal_id: UUID, request: Request, owner_id: UUID = Depends(require_owner)
) -> dict[str, object]:
    """Apply a partial update to one of the caller's meals."""
    container: AppContainer = request.app.state.container
    payload = await read_payload(request, MealUpdate)
    meal = container.meal_service.update_meal(meal_id, owner_id, payload.to_changes())
    if meal is None:
        raise NotFoundError(MEAL_NOT_FOUND)
    return success(serialize_meal(meal))


@router.delete("/{meal_id}")
async def delete_meal(
    meal_id: UUID, request: Request, owner_id: UUID = Depends(require_owner)
) -> dict[str, object]:
    """Delete one of the caller's meals."""
    container: AppContainer = request.app.state.container
    if not container.meal_service.delete_meal(meal_id, owner_id):
        raise NotFoundError(MEAL_NOT_FOUND)
    return success({"id": str(meal_id)})
