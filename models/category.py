# models/category.py

from typing import Optional
from pydantic import BaseModel, ConfigDict

from models.enums import CategoryRole


class CategoryPermission(BaseModel):
    """
    What the current member may do inside one financial category.
    """
    model_config = ConfigDict(frozen=True)

    can_view: bool = True
    can_edit: bool = False
    role: Optional[CategoryRole] = None
    is_group_leader: bool = False

    @classmethod
    def denied(cls) -> "CategoryPermission":
        return cls(can_view=False, can_edit=False, is_group_leader=False)


class CategoryLeader(BaseModel):
    """
    One active category_roles row.
    """
    id: str
    member_id: str
    role: Optional[CategoryRole] = None
