from fastapi import APIRouter, Depends, HTTPException

from core.logging_config import logger
from core.permissions import capabilities_for, effective_permissions
from core.session import Session, create_session_token
from dependencies.auth import require_session
from models.auth import LoginRequest, SessionRead, TokenResponse
from services.auth_service import authenticate


router = APIRouter(
    prefix="/auth",
    tags=["Auth"],
)


# ============================================================
# LOGIN (ACCESS CODE)
# ============================================================
@router.post("/login", response_model=TokenResponse, summary="Log in with an access code")
def login(payload: LoginRequest):
    result = authenticate(payload.code, payload.type)

    if not result.success:
        logger.warning(f"{payload.type} login failed: {result.error}")
        raise HTTPException(status_code=401, detail=result.error)

    principal = result.principal
    logger.info(f"{principal.type} {principal.id} logged in")

    return TokenResponse(
        access_token=create_session_token(principal),
        principal=principal,
        capabilities=capabilities_for(principal),
        permissions=result.permissions,
    )


# ============================================================
# CURRENT SESSION
# ============================================================
@router.get("/me", response_model=SessionRead, summary="Current authenticated principal")
def read_me(session: Session = Depends(require_session)):
    return SessionRead(
        principal=session.principal,
        capabilities=session.capabilities(),
        permissions=sorted(effective_permissions(session.principal)),
        level=session.permission_level(),
    )
