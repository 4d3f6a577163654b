"""
Shared fakes for the Supabase AsyncClient.

FakeSupabase mimics the three surfaces the service touches:
- client.table(name) → chainable query builder with an async execute()
- client.functions.invoke(name, options)
- client.auth.get_session()
Every call is recorded so tests can assert on what went over the wire.
"""

from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple

import httpx
import pytest
from supabase import FunctionsHttpError


class FakeQuery:
    def __init__(self, table: str, data: Any = None, error: Optional[BaseException] = None):
        self.table = table
        self.calls: List[Tuple[str, tuple, dict]] = []
        self._data = data
        self._error = error

    def _record(self, name: str, *args, **kwargs) -> "FakeQuery":
        self.calls.append((name, args, kwargs))
        return self

    def select(self, *args, **kwargs):
        return self._record("select", *args, **kwargs)

    def order(self, *args, **kwargs):
        return self._record("order", *args, **kwargs)

    def range(self, *args, **kwargs):
        return self._record("range", *args, **kwargs)

    def eq(self, *args, **kwargs):
        return self._record("eq", *args, **kwargs)

    def limit(self, *args, **kwargs):
        return self._record("limit", *args, **kwargs)

    def single(self, *args, **kwargs):
        return self._record("single", *args, **kwargs)

    def call_names(self) -> List[str]:
        return [name for name, _, _ in self.calls]

    def args_of(self, name: str) -> List[tuple]:
        return [(args, kwargs) for call, args, kwargs in self.calls if call == name]

    async def execute(self):
        self.calls.append(("execute", (), {}))
        if self._error is not None:
            raise self._error
        return SimpleNamespace(data=self._data)


class FakeFunctions:
    def __init__(self):
        self.calls: List[Tuple[str, Dict[str, Any]]] = []
        self.responses: Dict[str, Any] = {}
        self.default: Any = b'{"data": null, "error": null}'

    async def invoke(self, function_name: str, invoke_options: Optional[Dict[str, Any]] = None):
        self.calls.append((function_name, invoke_options or {}))
        outcome = self.responses.get(function_name, self.default)
        if isinstance(outcome, BaseException):
            raise outcome
        return outcome


class FakeAuth:
    def __init__(self, session: Any = None, error: Optional[BaseException] = None):
        self.session = session
        self.error = error
        self.calls = 0

    async def get_session(self):
        self.calls += 1
        if self.error is not None:
            raise self.error
        return self.session


class FakeSupabase:
    def __init__(self):
        self.queries: List[FakeQuery] = []
        self.table_results: Dict[str, Tuple[Any, Optional[BaseException]]] = {}
        self.functions = FakeFunctions()
        self.auth = FakeAuth()

    def table(self, name: str) -> FakeQuery:
        data, error = self.table_results.get(name, ([], None))
        query = FakeQuery(name, data, error)
        self.queries.append(query)
        return query

    @property
    def network_calls(self) -> int:
        return len(self.queries) + len(self.functions.calls) + self.auth.calls


def make_session(user_id: str) -> SimpleNamespace:
    return SimpleNamespace(user=SimpleNamespace(id=user_id), access_token="token")


def make_http_error(status: int, body: Any) -> FunctionsHttpError:
    """FunctionsHttpError chained to the httpx error carrying the response body, as supabase raises it."""
    request = httpx.Request("POST", "https://project.supabase.co/functions/v1/server_function")
    response = httpx.Response(status, json=body, request=request)
    error = FunctionsHttpError("An error occurred while requesting your edge function")
    error.__cause__ = httpx.HTTPStatusError(f"HTTP {status}", request=request, response=response)
    return error


@pytest.fixture
def fake_client() -> FakeSupabase:
    """Fresh fake Supabase client with no rows and an empty server_function answer."""
    return FakeSupabase()


@pytest.fixture
def signed_in_client(fake_client: FakeSupabase) -> FakeSupabase:
    """Fake client with an authenticated session for user-1."""
    fake_client.auth.session = make_session("user-1")
    return fake_client


@pytest.fixture
def http_error():
    """Factory for FunctionsHttpError instances with a JSON error body."""
    return make_http_error
