"""
backend.py — Supabase Client Lifecycle

Purpose:
- Create and provide access to the Supabase AsyncClient used by the service.
- Expose a FastAPI dependency `get_backend_client()` that hands out the
  process-wide client.
- Let tests and scripts inject their own client instead of the singleton.

Key Characteristics:
- One AsyncClient per process, created lazily on first use.
- The client owns its HTTP connections; nothing here opens or closes them.

This module does NOT:
- Run queries or invoke edge functions (see services/backend/*).
"""

from __future__ import annotations

from typing import Optional

from supabase import AsyncClient, acreate_client

from orgservice.core.config import Settings, settings
from orgservice.core.logging import get_logger

logger = get_logger(__name__)


class BackendConfigurationError(RuntimeError):
    """Raised when the Supabase URL or key is missing."""


_client: Optional[AsyncClient] = None


async def create_backend_client(config: Optional[Settings] = None) -> AsyncClient:
    config = config or settings
    if not config.SUPABASE_URL or not config.supabase_key:
        raise BackendConfigurationError(
            "Supabase is not configured. Please set SUPABASE_URL and either "
            "SUPABASE_SERVICE_ROLE_KEY or SUPABASE_ANON_KEY."
        )
    logger.info("Creating Supabase client for %s", config.SUPABASE_URL)
    return await acreate_client(config.SUPABASE_URL, config.supabase_key)


# -----------------------------------------------------------------------------
# FastAPI Dependency
# -----------------------------------------------------------------------------

async def get_backend_client() -> AsyncClient:
    """
    FastAPI dependency: returns the shared Supabase client.

    Usage in API endpoint:
        async def endpoint(client: AsyncClient = Depends(get_backend_client)):
            ...

    Raises:
        BackendConfigurationError: If SUPABASE_URL / key are empty
    """
    global _client
    if _client is None:
        _client = await create_backend_client()
    return _client


def set_backend_client(client: Optional[AsyncClient]) -> None:
    """Replace (or clear, with None) the shared client."""
    global _client
    _client = client
