"""Supabase Storage adapter for recipe images."""

from dataclasses import dataclass

import httpx
from storage3.utils import StorageException
from supabase import Client

from whattoeat.domain.errors import StorageError
from whattoeat.domain.images import StoredImage
from whattoeat.services.images import ImageStore

DEFAULT_CONTENT_TYPE = "application/octet-stream"

_STORAGE_FAILURES = (StorageException, httpx.HTTPError)


@dataclass
class SupabaseImageStore(ImageStore):
    """Stores images as flat objects in a Supabase Storage bucket."""

    client: Client
    bucket: str
    cache_seconds: int = 31536000

    def put(self, name: str, content: bytes, content_type: str) -> None:
        """Upload image bytes."""
        try:
            self.client.storage.from_(self.bucket).upload(
                path=name,
                file=content,
                file_options={
                    "content-type": content_type,
                    "cache-control": str(self.cache_seconds),
                },
            )
        except _STORAGE_FAILURES as exc:
            raise StorageError(f"Supabase image upload failed: {exc}") from exc

    def get(self, name: str) -> StoredImage | None:
        """Download image bytes with the content type recorded at upload."""
        bucket = self.client.storage.from_(self.bucket)
        try:
            entries = bucket.list("", {"search": name})
            match = next(
                (entry for entry in entries if entry.get("name") == name), None
            )
            if match is None:
                return None
            content = bucket.download(name)
        except _STORAGE_FAILURES as exc:
            raise StorageError(f"Supabase image download failed: {exc}") from exc
        metadata = match.get("metadata") or {}
        content_type = metadata.get("mimetype") or DEFAULT_CONTENT_TYPE
        return StoredImage(content=content, content_type=content_type)
