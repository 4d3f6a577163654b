"""
dispatch.py — How org actions reach the edge functions

Two integration styles exist on the backend:

- ServerFunctionDispatcher (default): one edge function, `server_function`,
  receives {"action": ..., "payload": ...} and answers {"data", "error"}.
- PerActionDispatcher (deprecated): one edge function per action
  (org_create, org_update, org_delete, ...) whose transport errors go
  through the http / relay / fetch classification.

Both expose `dispatch(action, payload) -> ResultEnvelope`, so the gateway
never knows which one is wired in. `build_dispatcher` picks one from
ORG_DISPATCH_MODE.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional, Protocol, Tuple

from supabase import AsyncClient

from orgservice.core.config import settings
from orgservice.core.logging import get_logger
from orgservice.models.envelope import ResultEnvelope
from orgservice.services.backend.functions import handle_server_function_response, invoke_function


logger = get_logger(__name__)


class OrgAction(str, Enum):
    UPSERT = "org_upsert"
    DELETE = "org_delete"
    USERS = "org_users"
    USER_ROLE_UPDATE = "org_user_role_update"
    USER_DELETE = "org_user_delete"


class OrgDispatcher(Protocol):
    async def dispatch(self, action: OrgAction, payload: Dict[str, Any]) -> ResultEnvelope:
        ...


class ServerFunctionDispatcher:
    def __init__(self, client: AsyncClient, function_name: Optional[str] = None):
        self._client = client
        self._function_name = function_name or settings.SERVER_FUNCTION_NAME

    async def dispatch(self, action: OrgAction, payload: Dict[str, Any]) -> ResultEnvelope:
        logger.debug("%s action=%s", self._function_name, action.value)
        result = await invoke_function(
            self._client,
            self._function_name,
            {"action": action.value, "payload": payload},
        )
        return handle_server_function_response(result)


class PerActionDispatcher:
    """
    Legacy style: every action is its own edge function.

    `org_upsert` has no function of its own here; it is split into
    `org_create` (no id) and `org_update` (with id).
    """

    def __init__(self, client: AsyncClient):
        self._client = client
        logger.warning(
            "Per-action edge functions are deprecated; set ORG_DISPATCH_MODE=server_function"
        )

    @staticmethod
    def route(action: OrgAction, payload: Dict[str, Any]) -> Tuple[str, Dict[str, Any]]:
        if action is OrgAction.UPSERT:
            if payload.get("id") is None:
                return "org_create", {"title": payload.get("title")}
            return "org_update", {"id": payload["id"], "title": payload.get("title")}
        return action.value, payload

    async def dispatch(self, action: OrgAction, payload: Dict[str, Any]) -> ResultEnvelope:
        function_name, body = self.route(action, payload)
        result = await invoke_function(self._client, function_name, body)
        return result.to_envelope()


def build_dispatcher(client: AsyncClient, mode: Optional[str] = None) -> OrgDispatcher:
    mode = mode or settings.ORG_DISPATCH_MODE
    if mode == "per_action":
        return PerActionDispatcher(client)
    if mode != "server_function":
        raise ValueError(f"Unknown org dispatch mode: {mode!r}")
    return ServerFunctionDispatcher(client)
