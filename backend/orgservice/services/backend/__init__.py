"""
backend package — Supabase access primitives shared by the entity gateways.

Expose the session provider, table accessors and edge function transport so
gateways can import them without touching the Supabase client directly.
"""

from .accessors import ItemNotFoundError, get_item_by_id, get_list, get_single_row  # noqa: F401
from .functions import (  # noqa: F401
    FunctionResult,
    classify_functions_error,
    handle_server_function_response,
    invoke_function,
)
from .session import SessionProvider  # noqa: F401
