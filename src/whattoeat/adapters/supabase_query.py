"""Shared helpers for Supabase PostgREST queries."""

from typing import Any

from postgrest.exceptions import APIError

from whattoeat.domain.errors import StorageError


def execute(query: Any, action: str) -> list[dict[str, object]]:
    """Run a query builder and return its rows, wrapping store failures."""
    try:
        response = query.execute()
    except APIError as exc:
        raise StorageError(f"Supabase {action} failed: {exc.message}") from exc
    return response.data or []
