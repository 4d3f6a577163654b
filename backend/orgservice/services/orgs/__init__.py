"""
orgs package — Organization and membership data access.
"""

from .dispatch import OrgAction, PerActionDispatcher, ServerFunctionDispatcher, build_dispatcher  # noqa: F401
from .gateway import OrgGateway  # noqa: F401
