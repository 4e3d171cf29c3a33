from typing import List, Optional

from pydantic import BaseModel

from models.capabilities import CapabilitySet
from models.enums import PrincipalType
from models.principal import Principal


# -----------------------------------------------------
# LOGIN REQUEST (access code for admins, member code for members)
# -----------------------------------------------------
class LoginRequest(BaseModel):
    code: str
    type: PrincipalType


# -----------------------------------------------------
# LOGIN RESULT (service layer, never raises)
# -----------------------------------------------------
class LoginResult(BaseModel):
    success: bool
    error: Optional[str] = None
    principal: Optional[Principal] = None
    permissions: List[str] = []


# -----------------------------------------------------
# TOKEN RESPONSE (signed session)
# -----------------------------------------------------
class TokenResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    principal: Principal
    capabilities: CapabilitySet
    permissions: List[str] = []


class SessionRead(BaseModel):
    principal: Principal
    capabilities: CapabilitySet
    permissions: List[str] = []
    level: int
