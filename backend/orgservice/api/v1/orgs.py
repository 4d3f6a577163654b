"""
orgs.py — Organization API Endpoints

Purpose:
- Expose the OrgGateway operations over HTTP for the web UI.

Endpoints:
- GET    /api/v1/orgs                         - List orgs (sorted, first page)
- GET    /api/v1/orgs/{org_id}                - Fetch one org
- GET    /api/v1/orgs/{org_id}/my-role        - Current user's role in an org
- POST   /api/v1/orgs                         - Create or update an org
- DELETE /api/v1/orgs/{org_id}                - Delete an org
- GET    /api/v1/orgs/{org_id}/users          - List an org's members
- PATCH  /api/v1/orgs/users/{orgs_users_id}/role - Change a member's role
- DELETE /api/v1/orgs/users/{orgs_users_id}   - Remove a member

Role in System:
- No business logic here. Every route returns the gateway envelope as-is
  with HTTP 200; `error` is the failure signal for the UI.
"""

from typing import Literal, Optional

from fastapi import APIRouter, Depends
from pydantic import BaseModel
from supabase import AsyncClient

from orgservice.core.backend import get_backend_client
from orgservice.models.envelope import ResultEnvelope
from orgservice.models.org import Org, OrgUserRole
from orgservice.services.orgs.gateway import OrgGateway

router = APIRouter(
    prefix="/orgs",
    tags=["orgs"]
)

# -----------------------------------------------------------------------------
# Dependencies
# -----------------------------------------------------------------------------


_gateway: Optional[OrgGateway] = None


async def get_org_gateway(client: AsyncClient = Depends(get_backend_client)) -> OrgGateway:
    """
    FastAPI dependency: one gateway (and one dispatcher) per Supabase client,
    rebuilt only when the shared client is replaced.
    """
    global _gateway
    if _gateway is None or _gateway.client is not client:
        _gateway = OrgGateway(client)
    return _gateway


# -----------------------------------------------------------------------------
# Request Schemas
# -----------------------------------------------------------------------------


class RoleUpdateRequest(BaseModel):
    new_user_role: Optional[OrgUserRole] = None


# -----------------------------------------------------------------------------
# Routes
# -----------------------------------------------------------------------------

@router.get("", response_model=ResultEnvelope)
async def list_orgs(
    column: str = "title",
    direction: Literal["asc", "desc"] = "asc",
    gateway: OrgGateway = Depends(get_org_gateway),
):
    return await gateway.fetch_orgs(column, direction)


@router.post("", response_model=ResultEnvelope)
async def save_org(org: Org, gateway: OrgGateway = Depends(get_org_gateway)):
    return await gateway.save_org(org)


# Membership routes are declared before /{org_id} so "users" never binds as an org id
@router.patch("/users/{orgs_users_id}/role", response_model=ResultEnvelope)
async def update_user_role(
    orgs_users_id: str,
    request: RoleUpdateRequest,
    gateway: OrgGateway = Depends(get_org_gateway),
):
    return await gateway.update_user_role(orgs_users_id, request.new_user_role or "")


@router.delete("/users/{orgs_users_id}", response_model=ResultEnvelope)
async def delete_org_user(orgs_users_id: str, gateway: OrgGateway = Depends(get_org_gateway)):
    return await gateway.delete_org_user(orgs_users_id)


@router.get("/{org_id}", response_model=ResultEnvelope)
async def get_org(org_id: str, gateway: OrgGateway = Depends(get_org_gateway)):
    return await gateway.get_org_by_id(org_id)


@router.get("/{org_id}/my-role", response_model=ResultEnvelope)
async def get_my_role(org_id: str, gateway: OrgGateway = Depends(get_org_gateway)):
    return await gateway.get_my_role_in_org(org_id)


@router.delete("/{org_id}", response_model=ResultEnvelope)
async def delete_org(org_id: str, gateway: OrgGateway = Depends(get_org_gateway)):
    return await gateway.delete_org(Org(id=org_id))


@router.get("/{org_id}/users", response_model=ResultEnvelope)
async def list_org_users(org_id: str, gateway: OrgGateway = Depends(get_org_gateway)):
    return await gateway.get_org_users(Org(id=org_id))
