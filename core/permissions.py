# core/permissions.py

from datetime import datetime
from typing import Dict, FrozenSet, Optional, Set

from core.roles import (
    NO_ACCESS_RANK,
    admin_rank,
    member_rank,
    permissions_for_rank,
)
from models.capabilities import CapabilitySet
from models.enums import Capability as C
from models.principal import AdminPrincipal, MemberPrincipal


ALL_CAPABILITIES: FrozenSet[C] = frozenset(C)


# ============================================
# CENTRALIZED RANK → CAPABILITIES MAP
# ============================================
CAPABILITY_TABLE: Dict[int, FrozenSet[C]] = {

    # =====================================================
    # SYSTEM ADMINS — every tier gets full access
    # =====================================================
    1: ALL_CAPABILITIES,
    2: ALL_CAPABILITIES,
    3: ALL_CAPABILITIES,
    4: ALL_CAPABILITIES,

    # =====================================================
    # GROUP LEADERS (presidente, vice, secretario, tesoureiro)
    # =====================================================
    5: frozenset({
        C.can_view_group_financial_info,
        C.can_view_monthly_cost,
        C.can_view_access_code,

        C.can_edit_member,
        C.can_toggle_member_status,
        C.can_view_member_phone,
        C.can_view_member_code,

        C.can_access_category_modal,
        C.can_add_transaction,
        C.can_delete_transaction,
        C.can_manage_category_leaders,

        C.can_create_payment_event,
        C.can_edit_payment_event,
        C.can_delete_payment_event,
        C.can_click_member_names,

        C.can_add_weekly_program,
        C.can_edit_weekly_program,
        C.can_delete_weekly_program,
        C.can_select_rehearsal_date,
    }),

    # =====================================================
    # SECOND CLASS (conselheiro, coordenador)
    # =====================================================
    6: frozenset({
        C.can_view_member_phone,
        C.can_select_rehearsal_date,
    }),

    # =====================================================
    # MEMBERS — no special permissions
    # =====================================================
    7: frozenset(),
}


def capabilities_for_rank(level: int, role: Optional[str] = None) -> CapabilitySet:
    grants = CAPABILITY_TABLE.get(level)
    if grants is None:
        return CapabilitySet.none()
    return CapabilitySet.from_grants(grants, level=level, role=role)


def _admin_can_act(admin: AdminPrincipal, now: Optional[datetime]) -> bool:
    return admin.is_active and not admin.is_locked(now)


# -----------------------------------------------------
# Capability resolution
# -----------------------------------------------------
def capabilities_for(principal, now: Optional[datetime] = None) -> CapabilitySet:
    """
    Resolve the capability set of a principal.

    Never raises: anything absent, inactive, locked or
    unrecognized resolves to CapabilitySet.none().
    """
    if isinstance(principal, AdminPrincipal):
        if not _admin_can_act(principal, now):
            return CapabilitySet.none()

        level = admin_rank(principal.permission_level)
        if level == NO_ACCESS_RANK:
            return CapabilitySet.none()

        # Admin tiers are not differentiated in the table
        return CapabilitySet.from_grants(
            ALL_CAPABILITIES, level=level, role=principal.permission_level
        )

    if isinstance(principal, MemberPrincipal):
        if not principal.is_active:
            return CapabilitySet.none()

        return capabilities_for_rank(member_rank(principal.role), role=principal.role)

    return CapabilitySet.none()


def permission_level(principal) -> int:
    if isinstance(principal, AdminPrincipal):
        return admin_rank(principal.permission_level)
    if isinstance(principal, MemberPrincipal):
        return member_rank(principal.role)
    return NO_ACCESS_RANK


# -----------------------------------------------------
# Legacy permission strings (attached at login)
# -----------------------------------------------------
def effective_permissions(principal, now: Optional[datetime] = None) -> Set[str]:
    if isinstance(principal, AdminPrincipal):
        if not _admin_can_act(principal, now):
            return set()
    elif isinstance(principal, MemberPrincipal):
        if not principal.is_active:
            return set()
    else:
        return set()

    return set(permissions_for_rank(permission_level(principal)))


def has_permission(principal, permission: str, now: Optional[datetime] = None) -> bool:
    effective = effective_permissions(principal, now)

    # Wildcard grants everything
    if "*" in effective:
        return True

    return permission in effective
