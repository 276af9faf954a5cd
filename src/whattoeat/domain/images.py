"""Domain models for uploaded images."""

from dataclasses import dataclass


@dataclass(frozen=True)
class StoredImage:
    """Image bytes read back from object storage."""

    content: bytes
    content_type: str
