"""Caller identity resolution."""

from typing import Protocol
from uuid import UUID


class IdentityVerifier(Protocol):
    """Interface for the external identity provider."""

    async def resolve_owner(self, token: str) -> UUID | None:
        """Return the owner id for a token, or None when it is not valid."""


def extract_token(authorization: str | None, cookie_token: str | None) -> str | None:
    """Pick the bearer token, falling back to the session cookie."""
    if authorization:
        scheme, _, credentials = authorization.partition(" ")
        if scheme.lower() == "bearer" and credentials.strip():
            return credentials.strip()
    if cookie_token and cookie_token.strip():
        return cookie_token.strip()
    return None
