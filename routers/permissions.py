# routers/permissions.py

from typing import List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from core.category_permissions import fetch_category_leaders, resolve_category_permission
from core.roles import ROLE_RANKS, permissions_for_rank
from core.session import Session
from dependencies.auth import get_session, require_session, requires_capability, requires_permission
from models.capabilities import CapabilitySet, NO_ACCESS_LEVEL
from models.category import CategoryLeader, CategoryPermission
from models.enums import Capability

router = APIRouter(
    prefix="/permissions",
    tags=["Permissions"],
)


class RoleRankRead(BaseModel):
    role: str
    rank: int
    permissions: List[str]


# -----------------------------------------------------
# GET /permissions/me
# Anonymous callers get the zero-capability set
# -----------------------------------------------------
@router.get("/me", response_model=CapabilitySet, summary="Capabilities of the current session")
def read_my_capabilities(session: Session = Depends(get_session)):
    return session.capabilities()


# -----------------------------------------------------
# GET /permissions/ranks
# -----------------------------------------------------
@router.get(
    "/ranks",
    response_model=List[RoleRankRead],
    summary="Role → rank table",
    dependencies=[Depends(requires_permission("manage_permissions"))],
)
def list_role_ranks():
    return [
        RoleRankRead(role=role.value, rank=rank, permissions=permissions_for_rank(rank))
        for role, rank in ROLE_RANKS
    ]


# -----------------------------------------------------
# GET /permissions/categories/{category_id}?group_id=
# -----------------------------------------------------
@router.get(
    "/categories/{category_id}",
    response_model=CategoryPermission,
    summary="What the current session may do in a financial category",
)
async def read_category_permission(
    category_id: str,
    group_id: str = Query(..., description="Group that owns the category"),
    session: Session = Depends(require_session),
):
    capabilities = session.capabilities()

    # Active admins hold every capability
    if session.is_admin():
        if capabilities.can_access_category_modal:
            return CategoryPermission(can_view=True, can_edit=True)
        return CategoryPermission.denied()

    if capabilities.level == NO_ACCESS_LEVEL:
        return CategoryPermission.denied()

    # Members only resolve categories of their own group
    if group_id != session.principal.group_id:
        return CategoryPermission.denied()

    return await resolve_category_permission(
        category_id,
        session.principal.id,
        group_id,
        capabilities=capabilities,
    )


# -----------------------------------------------------
# GET /permissions/categories/{category_id}/leaders
# -----------------------------------------------------
@router.get(
    "/categories/{category_id}/leaders",
    response_model=List[CategoryLeader],
    summary="Active leaders of a financial category",
)
def list_category_leaders(
    category_id: str,
    session: Session = Depends(requires_capability(Capability.can_manage_category_leaders)),
):
    # Admins see every group; members only their own
    group_id = None if session.is_admin() else session.principal.group_id
    return fetch_category_leaders(category_id, group_id=group_id)
