from typing import Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials

from core.logging_config import logger
from core.session import InvalidSessionToken, Session, decode_session_token
from models.enums import Capability
from services.principal_store import load_principal


bearer_scheme = HTTPBearer(auto_error=False)


# ============================================================
# SESSION (hydrated from the bearer token on every request)
# ============================================================
def get_session(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Session:
    """
    No token → anonymous session (no capabilities).
    Invalid or expired token → 401.
    Valid token → principal re-read from Supabase, so a
    deactivated account loses access immediately.
    Store unreachable → anonymous session.
    """
    if not credentials:
        return Session()

    unauthorized = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Invalid or expired session token",
        headers={"WWW-Authenticate": "Bearer"},
    )

    try:
        claims = decode_session_token(credentials.credentials)
    except InvalidSessionToken as e:
        logger.warning(f"Rejected session token: {e}")
        raise unauthorized

    try:
        principal = load_principal(claims.typ, claims.sub)
    except HTTPException as e:
        # Store outage: fall back to an anonymous session (no capabilities)
        logger.error(f"Could not load {claims.typ} {claims.sub} for session: {e.detail}")
        return Session()

    if principal is None:
        raise unauthorized

    return Session(principal)


def require_session(session: Session = Depends(get_session)) -> Session:
    if not session.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return session


# ============================================================
# CAPABILITY CHECK
# ============================================================
def requires_capability(capability: Capability):
    """
    Usage:
        @router.post("/", dependencies=[Depends(requires_capability(Capability.can_add_transaction))])
    """

    def dependency(session: Session = Depends(require_session)) -> Session:
        if not session.capabilities().allows(capability):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{capability}' required",
            )
        return session

    return dependency


# ============================================================
# LEGACY PERMISSION CHECK ("manage_groups", "*", ...)
# ============================================================
def requires_permission(permission: str):
    def dependency(session: Session = Depends(require_session)) -> Session:
        if not session.has_permission(permission):
            raise HTTPException(
                status_code=403,
                detail=f"Insufficient permissions: '{permission}' required",
            )
        return session

    return dependency
