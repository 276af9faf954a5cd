"""Recipe image upload service."""

import logging
import mimetypes
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID, uuid4

from whattoeat.domain.errors import InvalidInputError
from whattoeat.domain.images import StoredImage

IMAGE_ROUTE_PREFIX = "/api/images"

# Raster formats only.
ALLOWED_CONTENT_TYPES = frozenset(
    {"image/jpeg", "image/png", "image/gif", "image/webp", "image/avif", "image/heic"}
)

_logger = logging.getLogger(__name__)


class ImageStore(Protocol):
    """Object storage interface for images."""

    def put(self, name: str, content: bytes, content_type: str) -> None:
        """Store image bytes under a name."""

    def get(self, name: str) -> StoredImage | None:
        """Return stored image bytes, if present."""


@dataclass
class ImageService:
    """Validates uploads and hands them to object storage."""

    store: ImageStore
    max_upload_bytes: int = 5 * 1024 * 1024

    def upload(
        self,
        owner_id: UUID,
        content: bytes,
        content_type: str | None,
        filename: str | None = None,
    ) -> str:
        """Store an uploaded image and return the URL it is served from."""
        content_type = (content_type or "").split(";")[0].strip().lower()
        if not content_type.startswith("image/"):
            raise InvalidInputError("Only image files are allowed")
        if content_type not in ALLOWED_CONTENT_TYPES:
            raise InvalidInputError("Unsupported image type")
        if not content:
            raise InvalidInputError("Image file is empty")
        if len(content) > self.max_upload_bytes:
            limit_mb = self.max_upload_bytes // (1024 * 1024)
            raise InvalidInputError(f"Image must be {limit_mb}MB or smaller")
        name = f"{uuid4().hex}{_extension(content_type, filename)}"
        self.store.put(name, content, content_type)
        _logger.info(
            "Stored uploaded image",
            extra={"owner_id": str(owner_id), "image_name": name, "size": len(content)},
        )
        return f"{IMAGE_ROUTE_PREFIX}/{name}"

    def get(self, name: str) -> StoredImage | None:
        """Return a stored image by name."""
        if not name or "/" in name or name.startswith("."):
            return None
        return self.store.get(name)


def _extension(content_type: str, filename: str | None) -> str:
    guessed = mimetypes.guess_extension(content_type)
    if guessed:
        return guessed
    if filename and "." in filename:
        return "." + filename.rsplit(".", maxsplit=1)[1].lower()
    return ""
