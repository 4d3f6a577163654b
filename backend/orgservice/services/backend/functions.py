"""
functions.py — Edge function transport & response normalization

Responsibilities:
- Invoke a named Supabase edge function with a JSON body.
- Turn every transport failure into an ErrorInfo instead of an exception.
- Normalize the unified `server_function` response shape into a ResultEnvelope.

Transport failures come in three shapes, matched in this order:
    FunctionsHttpError   → the function answered non-2xx; its JSON body holds the reason
    FunctionsRelayError  → the Supabase relay could not reach the function
    httpx.RequestError   → the request never got a response (DNS, connect, TLS, ...)
Anything else keeps its own message under the `unknown` kind.
"""

from __future__ import annotations

import json
from dataclasses import dataclass
from typing import Any, Dict, Optional

import httpx
from supabase import AsyncClient, FunctionsError, FunctionsHttpError, FunctionsRelayError

from orgservice.core.logging import get_logger
from orgservice.models.envelope import UNKNOWN_ERROR_MESSAGE, ErrorInfo, ErrorKind, ResultEnvelope


logger = get_logger(__name__)


@dataclass(frozen=True)
class FunctionResult:
    """Raw outcome of one edge function call: decoded body or classified error."""
    data: Any = None
    error: Optional[ErrorInfo] = None

    def to_envelope(self) -> ResultEnvelope:
        return ResultEnvelope(data=self.data, error=self.error)


# --------------------------------------------------------------------------- #
# Error classification
# --------------------------------------------------------------------------- #
def _raw_message(exc: BaseException) -> str:
    message = getattr(exc, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(exc)


def _message_from_body(body: Any, fallback: str) -> str:
    if isinstance(body, dict):
        for key in ("message", "error", "msg"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value
            if isinstance(value, dict):
                nested = _message_from_body(value, "")
                if nested:
                    return nested
    elif isinstance(body, str) and body:
        return body
    return fallback


def _http_error_response(exc: FunctionsHttpError) -> Optional[httpx.Response]:
    # supabase raises FunctionsHttpError from the underlying httpx.HTTPStatusError
    cause = exc.__cause__ or exc.__context__
    if isinstance(cause, httpx.HTTPStatusError):
        return cause.response
    return None


def _response_body(response: httpx.Response) -> Any:
    try:
        return response.json()
    except ValueError:
        return response.text or None


def classify_functions_error(exc: BaseException) -> ErrorInfo:
    """
    Map a transport exception onto ErrorInfo.

    The HTTP branch reads the JSON error body of the failed response, so a
    function answering 400 with {"message": "bad title"} yields the message
    "bad title".
    """
    if isinstance(exc, FunctionsHttpError):
        response = _http_error_response(exc)
        body = _response_body(response) if response is not None else None
        status = response.status_code if response is not None else getattr(exc, "status", None)
        return ErrorInfo(
            message=_message_from_body(body, _raw_message(exc)),
            kind=ErrorKind.HTTP,
            status=status,
            details=body,
        )
    if isinstance(exc, FunctionsRelayError):
        return ErrorInfo(message=_raw_message(exc), kind=ErrorKind.RELAY, status=getattr(exc, "status", None))
    if isinstance(exc, httpx.RequestError):
        return ErrorInfo(message=_raw_message(exc), kind=ErrorKind.FETCH)
    return ErrorInfo(message=_raw_message(exc) or UNKNOWN_ERROR_MESSAGE, kind=ErrorKind.UNKNOWN)


# --------------------------------------------------------------------------- #
# Transport
# --------------------------------------------------------------------------- #
def _decode_body(raw: Any) -> Any:
    if isinstance(raw, (bytes, bytearray)):
        if not raw:
            return None
        text = raw.decode("utf-8", errors="replace")
        try:
            return json.loads(text)
        except ValueError:
            return text
    return raw


async def invoke_function(client: AsyncClient, name: str, body: Dict[str, Any]) -> FunctionResult:
    logger.debug("Invoking edge function %s", name)
    try:
        raw = await client.functions.invoke(name, {"body": body})
    except (FunctionsError, httpx.HTTPError) as exc:
        error = classify_functions_error(exc)
        logger.warning("Edge function %s failed (%s): %s", name, error.kind.value, error.message)
        return FunctionResult(error=error)
    return FunctionResult(data=_decode_body(raw))


# --------------------------------------------------------------------------- #
# server_function normalization
# --------------------------------------------------------------------------- #
def _remote_error(error: Any) -> ErrorInfo:
    if isinstance(error, dict):
        status = error.get("status", error.get("code"))
        return ErrorInfo(
            message=_message_from_body(error, UNKNOWN_ERROR_MESSAGE),
            kind=ErrorKind.REMOTE,
            status=status if isinstance(status, int) else None,
            details=error,
        )
    return ErrorInfo(message=str(error), kind=ErrorKind.REMOTE)


def handle_server_function_response(result: FunctionResult) -> ResultEnvelope:
    """
    Normalize a `server_function` call into a ResultEnvelope.

    The dispatcher answers with {"data": ..., "error": ...}. A transport
    error wins; an `error` field in the body becomes a `remote` ErrorInfo;
    any body that is not in envelope shape is passed through as data.
    """
    if result.error is not None:
        return ResultEnvelope.failure(result.error)

    body = result.data
    if isinstance(body, dict) and ("data" in body or "error" in body):
        if body.get("error"):
            return ResultEnvelope.failure(_remote_error(body["error"]), data=body.get("data"))
        return ResultEnvelope.success(body.get("data"))
    return ResultEnvelope.success(body)
