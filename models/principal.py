# models/principal.py

from datetime import datetime, timezone
from typing import Annotated, Literal, Optional, Union

from pydantic import BaseModel, EmailStr, Field


# ===============================================================
# AUTHENTICATED PRINCIPALS
# ===============================================================
# Roles are kept as the raw strings stored in Supabase.
# core.roles.rank() parses them into the closed enums and
# maps anything unknown to the no-access sentinel.
# ===============================================================

class AdminPrincipal(BaseModel):
    """
    Mirrors a row of system_admins.
    """
    type: Literal["admin"] = "admin"
    id: str
    name: str
    email: EmailStr
    access_code: Optional[str] = Field(None, exclude=True)
    permission_level: Optional[str] = None
    is_active: bool = False

    locked_until: Optional[datetime] = None
    last_login_at: Optional[datetime] = None
    access_attempts: Optional[int] = None
    created_by_admin_id: Optional[str] = None

    @property
    def role(self) -> Optional[str]:
        return self.permission_level

    def is_locked(self, now: Optional[datetime] = None) -> bool:
        if self.locked_until is None:
            return False

        now = now or datetime.now(timezone.utc)
        locked_until = self.locked_until
        if locked_until.tzinfo is None:
            locked_until = locked_until.replace(tzinfo=timezone.utc)
        if now.tzinfo is None:
            now = now.replace(tzinfo=timezone.utc)

        return locked_until > now


class MemberPrincipal(BaseModel):
    """
    Mirrors a row of members.
    """
    type: Literal["member"] = "member"
    id: str
    name: str
    member_code: str
    group_id: str
    role: Optional[str] = None
    is_active: bool = False

    profile_image_url: Optional[str] = None


Principal = Annotated[
    Union[AdminPrincipal, MemberPrincipal],
    Field(discriminator="type"),
]
