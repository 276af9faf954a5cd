"""Supabase Auth token verification client."""

from dataclasses import dataclass
from uuid import UUID

import httpx

from whattoeat.domain.errors import IdentityServiceError
from whattoeat.services.identity import IdentityVerifier

_REJECTED_STATUSES = {401, 403}


@dataclass
class SupabaseIdentityClient(IdentityVerifier):
    """Resolves access tokens to user ids via the Supabase Auth API.

    Only configuration lives on the instance; each verification opens its
    own HTTP client, so nothing is shared between requests.
    """

    supabase_url: str
    api_key: str
    timeout: float = 10.0
    transport: httpx.AsyncBaseTransport | None = None

    async def resolve_owner(self, token: str) -> UUID | None:
        """Return the user id the token belongs to, or None if rejected."""
        url = f"{self.supabase_url.rstrip('/')}/auth/v1/user"
        try:
            async with httpx.AsyncClient(
                transport=self.transport, timeout=self.timeout
            ) as http_client:
                response = await http_client.get(
                    url,
                    headers={
                        "apikey": self.api_key,
                        "Authorization": f"Bearer {token}",
                    },
                )
        except httpx.HTTPError as exc:
            raise IdentityServiceError("Identity service unreachable") from exc
        if response.status_code in _REJECTED_STATUSES:
            return None
        if response.is_error:
            raise IdentityServiceError(
                f"Identity service returned {response.status_code}"
            )
        user_id = response.json().get("id")
        if not isinstance(user_id, str):
            return None
        try:
            return UUID(user_id)
        except ValueError:
            return None
