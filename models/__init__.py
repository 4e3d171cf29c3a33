# -------------------------
# Enums
# -------------------------
from .enums import (
    AdminPermissionLevel,
    Capability,
    CategoryRole,
    MemberRole,
    PrincipalType,
)

# -------------------------
# Principals
# -------------------------
from .principal import (
    AdminPrincipal,
    MemberPrincipal,
    Principal,
)

# -------------------------
# Permissions
# -------------------------
from .capabilities import CapabilitySet, NO_ACCESS_LEVEL
from .category import CategoryLeader, CategoryPermission

# -------------------------
# Auth
# -------------------------
from .auth import (
    LoginRequest,
    LoginResult,
    SessionRead,
    TokenResponse,
)
