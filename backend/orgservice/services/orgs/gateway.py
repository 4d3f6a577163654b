"""
gateway.py — Organization data access for the UI

Purpose:
- One stateless façade over everything the UI does with orgs and memberships.
- Reads go straight to the `orgs` / `orgs_users` tables.
- Mutations and member listings go through the configured edge function
  dispatcher (see dispatch.py).

Contract:
- Every public method is async and returns a ResultEnvelope.
- No exception escapes a public method. Anything unexpected is logged with its
  traceback and reported as {"data": None, "error": {"message": "unknown error"}}.

Data Flow:
UI / API route → OrgGateway → (table query | dispatcher → edge function) → envelope
"""

from __future__ import annotations

import functools
from typing import Any, Callable, Dict, Optional, Union

import httpx
from supabase import AsyncClient, PostgrestAPIError

from orgservice.core.logging import get_logger
from orgservice.models.envelope import ErrorInfo, ErrorKind, ResultEnvelope
from orgservice.models.org import Org, OrgUserRole
from orgservice.services.backend.accessors import (
    ItemNotFoundError,
    get_item_by_id,
    get_list,
    get_single_row,
    query_error,
    transport_error,
)
from orgservice.services.backend.session import SessionProvider
from orgservice.services.orgs.dispatch import OrgAction, OrgDispatcher, build_dispatcher


logger = get_logger(__name__)

ORGS_TABLE = "orgs"
ORG_USERS_TABLE = "orgs_users"

# Listing is not paginated beyond the first page
ORGS_PAGE = 1
ORGS_PAGE_SIZE = 50

MISSING_ROLE_ARGS_MESSAGE = "orgs_users_id or new_user_role not provided"


def _envelope_guard(func=None, *, empty_data: Callable[[], Any] = lambda: None):
    """Turn any escaping exception into an "unknown error" envelope carrying `empty_data()`."""
    if func is None:
        return functools.partial(_envelope_guard, empty_data=empty_data)

    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs) -> ResultEnvelope:
        try:
            return await func(self, *args, **kwargs)
        except Exception:
            logger.exception("%s unknown error", func.__name__)
            return ResultEnvelope.failure(ErrorInfo.unknown(), data=empty_data())
    return wrapper


def _as_org(org: Union[Org, Dict[str, Any]]) -> Org:
    return org if isinstance(org, Org) else Org.model_validate(org)


class OrgGateway:
    def __init__(
        self,
        client: AsyncClient,
        sessions: Optional[SessionProvider] = None,
        dispatcher: Optional[OrgDispatcher] = None,
    ):
        self._client = client
        self._sessions = sessions or SessionProvider(client)
        self._dispatcher = dispatcher or build_dispatcher(client)

    @property
    def client(self) -> AsyncClient:
        return self._client

    # ------------------------------------------------------------------ #
    # Reads
    @_envelope_guard
    async def get_all_orgs(self) -> ResultEnvelope:
        return await self.fetch_orgs("title", "asc")

    @_envelope_guard(empty_data=list)
    async def fetch_orgs(self, column: str, direction: str) -> ResultEnvelope:
        result = await get_list(self._client, ORGS_TABLE, ORGS_PAGE, ORGS_PAGE_SIZE, column, direction)
        return ResultEnvelope(data=result.data if result.data is not None else [], error=result.error)

    @_envelope_guard
    async def get_org_by_id(self, org_id: str) -> ResultEnvelope:
        try:
            return await get_item_by_id(self._client, ORGS_TABLE, org_id)
        except ItemNotFoundError as exc:
            return ResultEnvelope.failure(ErrorInfo(message=str(exc), kind=ErrorKind.NOT_FOUND))
        except PostgrestAPIError as exc:
            return ResultEnvelope.failure(query_error(exc))
        except httpx.HTTPError as exc:
            logger.warning("Fetching org %s failed: %s", org_id, exc)
            return ResultEnvelope.failure(transport_error(exc))

    @_envelope_guard
    async def get_my_role_in_org(self, org_id: str) -> ResultEnvelope:
        user = await self._sessions.get_current_user_id()
        if not user.ok:
            return ResultEnvelope.failure(user.error)

        query = (
            self._client.table(ORG_USERS_TABLE)
            .select("user_role")
            .eq("orgid", org_id)
            .eq("userid", user.data)
        )
        result = await get_single_row(query)
        if not result.ok:
            return result
        return ResultEnvelope.success((result.data or {}).get("user_role"))

    # ------------------------------------------------------------------ #
    # Orgs
    @_envelope_guard
    async def save_org(self, org: Union[Org, Dict[str, Any]]) -> ResultEnvelope:
        """Create when the org has no id (or the "new" sentinel), update otherwise."""
        org = _as_org(org)
        payload = {"id": None if org.is_new else org.id, "title": org.title}
        return await self._dispatcher.dispatch(OrgAction.UPSERT, payload)

    @_envelope_guard
    async def delete_org(self, org: Union[Org, Dict[str, Any]]) -> ResultEnvelope:
        org = _as_org(org)
        return await self._dispatcher.dispatch(OrgAction.DELETE, {"id": org.id})

    # ------------------------------------------------------------------ #
    # Memberships
    @_envelope_guard
    async def get_org_users(self, org: Union[Org, Dict[str, Any]]) -> ResultEnvelope:
        org = _as_org(org)
        logger.debug("Listing users of org %s", org.id)
        return await self._dispatcher.dispatch(OrgAction.USERS, {"id": org.id})

    @_envelope_guard
    async def update_user_role(self, orgs_users_id: str, new_user_role: OrgUserRole) -> ResultEnvelope:
        if not orgs_users_id or not new_user_role:
            return ResultEnvelope.failure(
                ErrorInfo(message=MISSING_ROLE_ARGS_MESSAGE, kind=ErrorKind.VALIDATION)
            )
        return await self._dispatcher.dispatch(
            OrgAction.USER_ROLE_UPDATE,
            {"orgs_users_id": orgs_users_id, "new_user_role": new_user_role},
        )

    @_envelope_guard
    async def delete_org_user(self, orgs_users_id: str) -> ResultEnvelope:
        return await self._dispatcher.dispatch(OrgAction.USER_DELETE, {"id": orgs_users_id})
