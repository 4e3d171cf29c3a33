# services/principal_store.py

"""
Supabase reads for the two authentication domains:
system_admins (access codes) and members (member codes).
"""

from typing import Optional, Union

from pydantic import ValidationError

from core.logging_config import logger
from core.errors import handle_supabase_error, supabase_not_configured
from core.permissions import permission_level
from core.roles import NO_ACCESS_RANK
from core.supabase_client import get_supabase_client
from models.enums import PrincipalType
from models.principal import AdminPrincipal, MemberPrincipal


def _client():
    client = get_supabase_client()
    if client is None:
        raise supabase_not_configured()
    return client


def _maybe_single(query) -> Optional[dict]:
    result = query.maybe_single().execute()
    if result is None:
        return None
    return result.data or None


# -----------------------------------------------------
# Code lookups (active rows only)
# -----------------------------------------------------
def find_admin_by_code(code: str) -> Optional[dict]:
    client = _client()
    try:
        return _maybe_single(
            client.table("system_admins")
            .select("*")
            .eq("access_code", code)
            .eq("is_active", True)
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to verify admin code")


def find_member_by_code(code: str) -> Optional[dict]:
    client = _client()
    try:
        return _maybe_single(
            client.table("members")
            .select("*")
            .eq("member_code", code)
            .eq("is_active", True)
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to verify member code")


# -----------------------------------------------------
# Id lookups (any status; callers check is_active)
# -----------------------------------------------------
def get_admin(admin_id: str) -> Optional[dict]:
    client = _client()
    try:
        return _maybe_single(client.table("system_admins").select("*").eq("id", admin_id))
    except Exception as e:
        raise handle_supabase_error(e, "Failed to load admin")


def get_member(member_id: str) -> Optional[dict]:
    client = _client()
    try:
        return _maybe_single(client.table("members").select("*").eq("id", member_id))
    except Exception as e:
        raise handle_supabase_error(e, "Failed to load member")


def get_group(group_id: str) -> Optional[dict]:
    client = _client()
    try:
        return _maybe_single(
            client.table("groups").select("id, name, is_active").eq("id", group_id)
        )
    except Exception as e:
        raise handle_supabase_error(e, "Failed to verify group")


def warn_if_unranked(principal: Union[AdminPrincipal, MemberPrincipal]) -> None:
    """Log principals whose role maps to no rank; they resolve to no access."""
    if permission_level(principal) == NO_ACCESS_RANK:
        logger.warning(
            f"Unrecognized role '{principal.role}' on {principal.type} {principal.id}; "
            f"resolved to no access"
        )


def load_principal(
    principal_type: PrincipalType, principal_id: str
) -> Optional[Union[AdminPrincipal, MemberPrincipal]]:
    """
    Re-read the principal behind a session token.
    Returns None when the row no longer exists or no longer
    has the fields a principal needs.
    """
    if principal_type == PrincipalType.admin:
        model, row = AdminPrincipal, get_admin(principal_id)
    else:
        model, row = MemberPrincipal, get_member(principal_id)

    if not row:
        return None

    try:
        principal = model(**row)
    except ValidationError as e:
        logger.warning(f"Invalid {principal_type} record {principal_id}: {e.error_count()} field error(s)")
        return None

    warn_if_unranked(principal)
    return principal
