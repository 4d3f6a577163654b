"""
envelope.py — Uniform {data, error} result shape

Purpose:
- Every public org operation returns a ResultEnvelope instead of raising.
- ErrorInfo carries a normalized message plus a kind tag so callers can
  branch on the failure family without isinstance checks.

Convention:
- `error is None` is the only success signal. `data` and `error` are not
  forced to be mutually exclusive.
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Generic, Optional, TypeVar

from pydantic import BaseModel

T = TypeVar("T")

UNKNOWN_ERROR_MESSAGE = "unknown error"


class ErrorKind(str, Enum):
    HTTP = "http"                # edge function answered with a non-2xx status
    RELAY = "relay"              # Supabase relay could not reach the function
    FETCH = "fetch"              # network-level failure before any response
    QUERY = "query"              # PostgREST rejected a table query
    SESSION = "session"          # no usable auth session
    REMOTE = "remote"            # edge function reported a failure in its JSON body
    VALIDATION = "validation"    # rejected locally, no network call made
    NOT_FOUND = "not_found"
    UNKNOWN = "unknown"


class ErrorInfo(BaseModel):
    message: str
    kind: ErrorKind = ErrorKind.UNKNOWN
    status: Optional[int] = None
    details: Optional[Any] = None

    @classmethod
    def unknown(cls) -> "ErrorInfo":
        return cls(message=UNKNOWN_ERROR_MESSAGE, kind=ErrorKind.UNKNOWN)


class ResultEnvelope(BaseModel, Generic[T]):
    data: Optional[T] = None
    error: Optional[ErrorInfo] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, data: Any) -> "ResultEnvelope":
        return cls(data=data, error=None)

    @classmethod
    def failure(cls, error: ErrorInfo, data: Any = None) -> "ResultEnvelope":
        return cls(data=data, error=error)
