"""Analytics endpoint."""

from __future__ import annotations

from datetime import date  # noqa: TC003
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request

from whattoeat.api.auth import require_owner
from whattoeat.api.errors import success
from whattoeat.api.serializers import serialize_analytics

if TYPE_CHECKING:
    from whattoeat.containers import AppContainer

router = APIRouter(prefix="/api/analytics", tags=["analytics"])


@router.get("")
async def get_analytics(
    request: Request,
    owner_id: UUID = Depends(require_owner),
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
) -> dict[str, object]:
    """Return meal statistics for the caller."""
    container: AppContainer = request.app.state.container
    analytics = container.analytics_service.get_analytics(
        owner_id, start_date, end_date
    )
    return success(serialize_analytics(analytics))
