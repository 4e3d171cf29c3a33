# core/category_permissions.py

from typing import List, Optional

from fastapi import HTTPException

from core.errors import handle_supabase_error, supabase_not_configured
from core.logging_config import logger
from core.supabase_client import get_supabase_client
from models.capabilities import CapabilitySet
from models.category import CategoryLeader, CategoryPermission
from models.enums import CategoryRole


GROUP_LEADER_COLUMNS = ("president_id", "vice_president_1_id", "vice_president_2_id")


def evaluate_category_permission(
    is_locked: bool,
    has_role: bool,
    is_group_leader: bool,
    role: Optional[CategoryRole] = None,
    capabilities: Optional[CapabilitySet] = None,
) -> CategoryPermission:
    """
    A category is editable when it is unlocked, or the member holds
    a role in it, or the member leads the group.

    Without a capability set every member may view the category.
    With one, viewing also needs a role, group leadership or one of
    the financial capabilities.
    """
    can_edit = (not is_locked) or has_role or is_group_leader

    if capabilities is None:
        can_view = True
    else:
        can_view = (
            has_role
            or is_group_leader
            or capabilities.can_view_group_financial_info
            or capabilities.can_access_category_modal
        )

    return CategoryPermission(
        can_view=can_view,
        can_edit=can_edit,
        role=role,
        is_group_leader=is_group_leader,
    )


def _single_row(result) -> Optional[dict]:
    # maybe_single().execute() returns None on some client versions
    if result is None:
        return None
    return result.data or None


def _fetch_group_leader_ids(client, group_id: str) -> set:
    row = _single_row(
        client.table("groups")
        .select(", ".join(GROUP_LEADER_COLUMNS))
        .eq("id", group_id)
        .maybe_single()
        .execute()
    )
    if not row:
        return set()
    return {row.get(col) for col in GROUP_LEADER_COLUMNS if row.get(col)}


def _fetch_category_role(client, category_id: str, member_id: str) -> Optional[dict]:
    return _single_row(
        client.table("category_roles")
        .select("role")
        .eq("category_id", category_id)
        .eq("member_id", member_id)
        .eq("is_active", True)
        .limit(1)
        .maybe_single()
        .execute()
    )


def _fetch_category(client, category_id: str) -> Optional[dict]:
    return _single_row(
        client.table("financial_categories")
        .select("id, group_id, is_locked")
        .eq("id", category_id)
        .maybe_single()
        .execute()
    )


async def resolve_category_permission(
    category_id: Optional[str],
    member_id: Optional[str],
    group_id: Optional[str],
    capabilities: Optional[CapabilitySet] = None,
) -> CategoryPermission:
    """
    Read group leadership, the member's category role and the
    category row, then evaluate the permission.

    A category owned by another group, or any read failure, resolves
    to CategoryPermission.denied().
    """
    if not category_id or not member_id or not group_id:
        return CategoryPermission()

    client = get_supabase_client()
    if client is None:
        logger.error("Category permission check skipped: Supabase not configured")
        return CategoryPermission.denied()

    try:
        leader_ids = _fetch_group_leader_ids(client, group_id)
        role_row = _fetch_category_role(client, category_id, member_id)
        category = _fetch_category(client, category_id)
    except Exception as e:
        logger.error(
            f"Category permission check failed for category {category_id}, "
            f"member {member_id}: {e}"
        )
        return CategoryPermission.denied()

    if category is not None and category.get("group_id") != group_id:
        logger.warning(
            f"Category {category_id} is not owned by group {group_id}; "
            f"denying member {member_id}"
        )
        return CategoryPermission.denied()

    # Unknown category: treat as locked
    is_locked = True if category is None else bool(category.get("is_locked") or False)

    return evaluate_category_permission(
        is_locked=is_locked,
        has_role=role_row is not None,
        is_group_leader=member_id in leader_ids,
        role=CategoryRole.parse(role_row.get("role")) if role_row else None,
        capabilities=capabilities,
    )


# -----------------------------------------------------
# Category leaders (presidente / secretario / auxiliar)
# -----------------------------------------------------
def fetch_category_leaders(category_id: str, group_id: Optional[str] = None) -> List[CategoryLeader]:
    """
    Active category_roles rows of one category.
    When group_id is given, a category owned by another group is a 404.
    """
    client = get_supabase_client()
    if client is None:
        raise supabase_not_configured()

    if group_id:
        try:
            category = _fetch_category(client, category_id)
        except Exception as e:
            raise handle_supabase_error(e, "Failed to load category")

        if category is None or category.get("group_id") != group_id:
            raise HTTPException(status_code=404, detail="Category not found")

    try:
        result = (
            client.table("category_roles")
            .select("id, member_id, role")
            .eq("category_id", category_id)
            .eq("is_active", True)
            .execute()
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to load category leaders")

    return [
        CategoryLeader(
            id=row["id"],
            member_id=row["member_id"],
            role=CategoryRole.parse(row.get("role")),
        )
        for row in (result.data or [])
    ]
