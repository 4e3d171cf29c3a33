# services/auth_service.py

from fastapi import HTTPException
from pydantic import ValidationError

from core.logging_config import logger
from core.permissions import effective_permissions
from models.auth import LoginResult
from models.enums import PrincipalType
from models.principal import AdminPrincipal, MemberPrincipal
from services import principal_store


ADMIN_REQUIRED_FIELDS = ("id", "name", "email", "permission_level")
MEMBER_REQUIRED_FIELDS = ("id", "name", "group_id", "role")


def _missing_fields(row: dict, required) -> list:
    return [f for f in required if not row.get(f)]


def _login_admin(code: str) -> LoginResult:
    try:
        row = principal_store.find_admin_by_code(code)
    except HTTPException:
        return LoginResult(success=False, error="Error verifying administrator code")

    if not row:
        return LoginResult(success=False, error="Invalid or inactive administrator code")

    missing = _missing_fields(row, ADMIN_REQUIRED_FIELDS)
    if missing:
        logger.error(f"Incomplete admin record {row.get('id')}: missing {missing}")
        return LoginResult(success=False, error="Incomplete administrator data")

    try:
        admin = AdminPrincipal(**row)
    except ValidationError:
        logger.error(f"Invalid admin record {row.get('id')}")
        return LoginResult(success=False, error="Incomplete administrator data")

    principal_store.warn_if_unranked(admin)

    if admin.is_locked():
        logger.warning(f"Locked admin {admin.id} attempted login")
        return LoginResult(success=False, error="Administrator account is temporarily locked")

    return LoginResult(
        success=True,
        principal=admin,
        permissions=sorted(effective_permissions(admin)),
    )


def _login_member(code: str) -> LoginResult:
    try:
        row = principal_store.find_member_by_code(code)
    except HTTPException:
        return LoginResult(success=False, error="Error verifying member code")

    if not row:
        return LoginResult(success=False, error="Invalid or inactive member code")

    missing = _missing_fields(row, MEMBER_REQUIRED_FIELDS)
    if missing:
        logger.error(f"Incomplete member record {row.get('id')}: missing {missing}")
        return LoginResult(success=False, error="Incomplete member data")

    try:
        group = principal_store.get_group(row["group_id"])
    except HTTPException:
        return LoginResult(success=False, error="Error verifying group")

    if not group or not group.get("is_active"):
        return LoginResult(success=False, error="Group inactive or not found")

    try:
        member = MemberPrincipal(**row)
    except ValidationError:
        logger.error(f"Invalid member record {row.get('id')}")
        return LoginResult(success=False, error="Incomplete member data")

    principal_store.warn_if_unranked(member)

    return LoginResult(
        success=True,
        principal=member,
        permissions=sorted(effective_permissions(member)),
    )


def authenticate(code: str, principal_type: PrincipalType) -> LoginResult:
    """
    Access-code login.

    Admins log in with system_admins.access_code, members with
    members.member_code (and need an active group). Failures come
    back as LoginResult(success=False, error=...), never raised.
    """
    code = (code or "").strip()
    if not code:
        return LoginResult(success=False, error="Access code is required")

    if principal_type == PrincipalType.admin:
        return _login_admin(code)
    return _login_member(code)
