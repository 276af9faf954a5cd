"""Request-scoped caller identity."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID

from fastapi import Depends, Header, Request

from whattoeat.domain.errors import UnauthorizedError
from whattoeat.services.identity import IdentityVerifier, extract_token

if TYPE_CHECKING:
    from whattoeat.containers import AppContainer


def get_identity_verifier(request: Request) -> IdentityVerifier:
    """Return the identity verifier for this request."""
    container: AppContainer = request.app.state.container
    return container.identity_verifier


async def require_owner(
    request: Request,
    authorization: str | None = Header(default=None),
    verifier: IdentityVerifier = Depends(get_identity_verifier),
) -> UUID:
    """Resolve the caller's owner id or reject the request with 401."""
    container: AppContainer = request.app.state.container
    token = extract_token(
        authorization, request.cookies.get(container.settings.session_cookie_name)
    )
    if token is None:
        raise UnauthorizedError("Authentication required")
    owner_id = await verifier.resolve_owner(token)
    if owner_id is None:
        raise UnauthorizedError("Invalid or expired credentials")
    return owner_id
