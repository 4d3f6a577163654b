"""
Session provider: who is the current authenticated user.

Wraps `client.auth.get_session()` so the gateways only ever see an envelope,
never an auth exception.
"""

from __future__ import annotations

from typing import Any, Optional

from supabase import AsyncClient, AuthError

from orgservice.core.logging import get_logger
from orgservice.models.envelope import ErrorInfo, ErrorKind, ResultEnvelope


logger = get_logger(__name__)

NO_SESSION_MESSAGE = "no authenticated session"


class SessionProvider:
    def __init__(self, client: AsyncClient):
        self._client = client

    async def get_session(self) -> ResultEnvelope:
        """Current auth session, or None when nobody is signed in."""
        try:
            session = await self._client.auth.get_session()
        except AuthError as exc:
            logger.warning("Session lookup failed: %s", exc)
            return ResultEnvelope.failure(
                ErrorInfo(message=str(exc) or NO_SESSION_MESSAGE, kind=ErrorKind.SESSION)
            )
        return ResultEnvelope.success(session)

    async def get_current_user_id(self) -> ResultEnvelope:
        result = await self.get_session()
        if not result.ok:
            return result
        user_id = _user_id(result.data)
        if not user_id:
            return ResultEnvelope.failure(ErrorInfo(message=NO_SESSION_MESSAGE, kind=ErrorKind.SESSION))
        return ResultEnvelope.success(user_id)


def _user_id(session: Any) -> Optional[str]:
    user = getattr(session, "user", None)
    user_id = getattr(user, "id", None)
    return str(user_id) if user_id else None
