"""
Generic table accessors shared by the entity gateways.

Thin helpers around the PostgREST query builder exposed by the Supabase
client: paged listing, fetch-by-id and single-row lookups.
"""

from __future__ import annotations

from typing import Any, Dict, Optional, Tuple

import httpx
from supabase import AsyncClient, PostgrestAPIError

from orgservice.core.logging import get_logger
from orgservice.models.envelope import ErrorInfo, ErrorKind, ResultEnvelope


logger = get_logger(__name__)


class ItemNotFoundError(RuntimeError):
    """Raised by get_item_by_id when no row carries the requested id."""

    def __init__(self, collection: str, item_id: str):
        super().__init__(f"No row in '{collection}' with id {item_id!r}")
        self.collection = collection
        self.item_id = item_id


def query_error(exc: PostgrestAPIError) -> ErrorInfo:
    return ErrorInfo(
        message=exc.message or str(exc),
        kind=ErrorKind.QUERY,
        details={"code": exc.code, "details": exc.details, "hint": exc.hint},
    )


def transport_error(exc: httpx.HTTPError) -> ErrorInfo:
    """Network failure talking to PostgREST, before any usable answer came back."""
    if isinstance(exc, httpx.HTTPStatusError):
        return ErrorInfo(message=str(exc), kind=ErrorKind.HTTP, status=exc.response.status_code)
    return ErrorInfo(message=str(exc) or type(exc).__name__, kind=ErrorKind.FETCH)


def page_bounds(page: int, page_size: int) -> Tuple[int, int]:
    """Inclusive row range for a 1-based page."""
    start = max(page - 1, 0) * page_size
    return start, start + page_size - 1


async def get_list(
    client: AsyncClient,
    collection: str,
    page: int,
    page_size: int,
    sort_column: str,
    sort_direction: str,
) -> ResultEnvelope:
    start, end = page_bounds(page, page_size)
    try:
        response = await (
            client.table(collection)
            .select("*")
            .order(sort_column, desc=sort_direction == "desc")
            .range(start, end)
            .execute()
        )
    except PostgrestAPIError as exc:
        logger.warning("Listing %s failed: %s", collection, exc.message)
        return ResultEnvelope.failure(query_error(exc))
    except httpx.HTTPError as exc:
        logger.warning("Listing %s failed: %s", collection, exc)
        return ResultEnvelope.failure(transport_error(exc))
    return ResultEnvelope.success(response.data)


async def get_item_by_id(client: AsyncClient, collection: str, item_id: str) -> ResultEnvelope:
    """
    Fetch one row by primary key.

    Raises:
        ItemNotFoundError: no row matched
        PostgrestAPIError: the query itself was rejected
        httpx.HTTPError: the request never got an answer
    """
    response = await (
        client.table(collection)
        .select("*")
        .eq("id", item_id)
        .limit(1)
        .execute()
    )
    rows = response.data or []
    if not rows:
        raise ItemNotFoundError(collection, item_id)
    return ResultEnvelope.success(rows[0])


async def get_single_row(query: Any) -> ResultEnvelope:
    """
    Execute a filtered select that must match exactly one row.

    Zero or several matches come back from PostgREST as an error (PGRST116)
    and end up in the envelope.
    """
    try:
        response = await query.limit(1).single().execute()
    except PostgrestAPIError as exc:
        return ResultEnvelope.failure(query_error(exc))
    except httpx.HTTPError as exc:
        return ResultEnvelope.failure(transport_error(exc))
    row: Optional[Dict[str, Any]] = response.data
    return ResultEnvelope.success(row)
