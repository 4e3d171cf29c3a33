# core/roles.py

from typing import Dict, FrozenSet, List, Optional, Tuple, Union

from models.enums import AdminPermissionLevel, BaseStrEnum, MemberRole


NO_ACCESS_RANK = 999

ADMIN_RANKS: FrozenSet[int] = frozenset({1, 2, 3, 4})
MEMBER_RANKS: FrozenSet[int] = frozenset({5, 6, 7})


# ============================================
# ROLE → RANK (1 = most privileged)
# ============================================
# Declared order matters: if a role is ever listed twice,
# the first entry wins.
ROLE_RANKS: List[Tuple[BaseStrEnum, int]] = [

    # =====================================================
    # SYSTEM ADMINS
    # =====================================================
    (AdminPermissionLevel.super_admin, 1),
    (AdminPermissionLevel.admin_principal, 2),
    (AdminPermissionLevel.admin_adjunto, 3),
    (AdminPermissionLevel.admin_supervisor, 4),

    # =====================================================
    # GROUP LEADERS
    # =====================================================
    (MemberRole.presidente, 5),
    (MemberRole.vice_presidente, 5),
    (MemberRole.secretario, 5),
    (MemberRole.tesoureiro, 5),

    # =====================================================
    # SECOND CLASS
    # =====================================================
    (MemberRole.conselheiro, 6),
    (MemberRole.coordenador, 6),

    # =====================================================
    # MEMBERS
    # =====================================================
    (MemberRole.membro, 7),
]


def _build_rank_index() -> Dict[str, int]:
    index: Dict[str, int] = {}
    for role, role_rank in ROLE_RANKS:
        index.setdefault(role.value, role_rank)
    return index


_RANK_INDEX = _build_rank_index()


# ============================================
# RANK → LEGACY PERMISSION STRINGS
# ============================================
# Coarse permissions attached to the session at login.
LEVEL_PERMISSIONS: Dict[int, List[str]] = {
    1: ["*"],
    2: [
        "manage_system", "manage_admins",
        "manage_groups", "manage_members",
        "view_statistics", "manage_permissions",
    ],
    3: [
        "manage_groups", "manage_members",
        "view_statistics", "limited_admin_functions",
    ],
    4: [
        "view_groups", "view_members",
        "view_statistics", "supervisor_access",
    ],
    5: ["manage_group_members", "update_group_info", "view_group_data"],
    6: ["view_group_data", "limited_access"],
    7: ["view_basic_info", "view_group_info"],
}


def parse_role(role: Union[str, BaseStrEnum, None]) -> Optional[BaseStrEnum]:
    """Admin permission levels are checked before member roles."""
    if role is None:
        return None
    return AdminPermissionLevel.parse(role) or MemberRole.parse(role)


def rank(role: Union[str, BaseStrEnum, None]) -> int:
    """
    Rank of a role, 1 (most privileged) to 7.
    Unknown or missing roles return NO_ACCESS_RANK.
    """
    parsed = parse_role(role)
    if parsed is None:
        return NO_ACCESS_RANK

    return _RANK_INDEX.get(parsed.value, NO_ACCESS_RANK)


def admin_rank(permission_level: Union[str, AdminPermissionLevel, None]) -> int:
    """Rank of a system_admins.permission_level; member roles do not count."""
    parsed = AdminPermissionLevel.parse(permission_level)
    if parsed is None:
        return NO_ACCESS_RANK
    return _RANK_INDEX[parsed.value]


def member_rank(role: Union[str, MemberRole, None]) -> int:
    """Rank of a members.role; a member can never hold an admin rank."""
    parsed = MemberRole.parse(role)
    if parsed is None:
        return NO_ACCESS_RANK
    return _RANK_INDEX[parsed.value]


def permissions_for_rank(value: int) -> List[str]:
    return list(LEVEL_PERMISSIONS.get(value, []))
