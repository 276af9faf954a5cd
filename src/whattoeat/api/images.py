"""Image upload and delivery endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, Response
from starlette.datastructures import UploadFile

from whattoeat.api.auth import require_owner
from whattoeat.api.errors import success
from whattoeat.domain.errors import InvalidInputError, NotFoundError

if TYPE_CHECKING:
    from whattoeat.containers import AppContainer

router = APIRouter(prefix="/api", tags=["images"])


@router.post("/upload")
async def upload_image(
    request: Request, owner_id: UUID = Depends(require_owner)
) -> dict[str, object]:
    """Store an uploaded recipe photo and return its URL."""
    container: AppContainer = request.app.state.container
    async with request.form(max_files=1) as form:
        image = form.get("image")
        if not isinstance(image, UploadFile):
            raise InvalidInputError("No image file provided")
        limit = container.image_service.max_upload_bytes
        # One byte past the limit is enough to reject oversized files.
        content = await image.read(limit + 1)
    image_url = container.image_service.upload(
        owner_id,
        content=content,
        content_type=image.content_type,
        filename=image.filename,
    )
    return success({"imageUrl": image_url})


@router.get("/images/{name}")
async def get_image(name: str, request: Request) -> Response:
    """Serve a stored image with a long-lived cache header."""
    container: AppContainer = request.app.state.container
    stored = container.image_service.get(name)
    if stored is None:
        raise NotFoundError("Image not found")
    return Response(
        content=stored.content,
        media_type=stored.content_type,
        headers={
            "Cache-Control": (
                f"public, max-age={container.settings.image_cache_seconds}, immutable"
            ),
            "X-Content-Type-Options": "nosniff",
        },
    )
