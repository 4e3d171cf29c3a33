# core/session.py

from datetime import datetime, timedelta, timezone
from typing import Optional, Union

from jose import JWTError, jwt
from pydantic import BaseModel

from core.config import settings
from core.permissions import capabilities_for, has_permission, permission_level
from models.capabilities import CapabilitySet
from models.enums import PrincipalType
from models.principal import AdminPrincipal, MemberPrincipal


class InvalidSessionToken(Exception):
    """Raised when a session token is malformed, tampered with or expired."""


class SessionClaims(BaseModel):
    sub: str
    typ: PrincipalType
    exp: datetime


# ============================================================
# Session (one per request, never a module-level singleton)
# ============================================================
class Session:
    """
    The authenticated principal for one caller.

    Mutated only by login() and logout(); everything else is
    derived from the principal on each call.
    """

    def __init__(self, principal: Optional[Union[AdminPrincipal, MemberPrincipal]] = None):
        self._principal = principal

    @property
    def principal(self):
        return self._principal

    @property
    def is_authenticated(self) -> bool:
        return self._principal is not None

    def login(self, principal: Union[AdminPrincipal, MemberPrincipal]) -> None:
        self._principal = principal

    def logout(self) -> None:
        self._principal = None

    def is_admin(self) -> bool:
        return isinstance(self._principal, AdminPrincipal)

    def is_member(self) -> bool:
        return isinstance(self._principal, MemberPrincipal)

    def permission_level(self) -> int:
        return permission_level(self._principal)

    def capabilities(self) -> CapabilitySet:
        return capabilities_for(self._principal)

    def has_permission(self, permission: str) -> bool:
        if self._principal is None:
            return False
        return has_permission(self._principal, permission)


# ============================================================
# Signed session tokens
# ============================================================
def _secret() -> str:
    if not settings.JWT_SECRET_KEY:
        raise RuntimeError("JWT_SECRET_KEY is not configured")
    return settings.JWT_SECRET_KEY


def create_session_token(
    principal: Union[AdminPrincipal, MemberPrincipal],
    expires_delta: Optional[timedelta] = None,
) -> str:
    expires_delta = expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    expire = datetime.now(timezone.utc) + expires_delta
    to_encode = {
        "sub": principal.id,
        "typ": principal.type,
        "exp": expire,
    }
    return jwt.encode(to_encode, _secret(), algorithm=settings.JWT_ALGORITHM)


def decode_session_token(token: str) -> SessionClaims:
    try:
        payload = jwt.decode(token, _secret(), algorithms=[settings.JWT_ALGORITHM])
    except JWTError as e:
        raise InvalidSessionToken(str(e)) from e

    principal_type = PrincipalType.parse(payload.get("typ"))
    if not payload.get("sub") or principal_type is None or "exp" not in payload:
        raise InvalidSessionToken("Session token is missing required claims")

    return SessionClaims(
        sub=payload["sub"],
        typ=principal_type,
        exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
    )
