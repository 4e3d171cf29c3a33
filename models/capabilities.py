# models/capabilities.py

from typing import FrozenSet, Iterable, Optional

from pydantic import BaseModel, ConfigDict

from models.enums import Capability


NO_ACCESS_LEVEL = 999


class CapabilitySet(BaseModel):
    """
    Boolean UI capabilities for one principal.

    Immutable and recomputed on every read; see
    core.permissions.capabilities_for().
    """
    model_config = ConfigDict(frozen=True)

    # Navigation
    can_access_new_member: bool = False
    can_access_reports: bool = False
    can_access_admins: bool = False
    can_access_settings: bool = False
    can_access_monthly_plans: bool = False

    # Groups
    can_create_group: bool = False
    can_edit_group: bool = False
    can_delete_group: bool = False
    can_add_member: bool = False
    can_view_group_financial_info: bool = False

    # Group details
    can_edit_group_details: bool = False
    can_view_monthly_plans: bool = False
    can_view_monthly_cost: bool = False
    can_view_access_code: bool = False

    # Members
    can_edit_member: bool = False
    can_toggle_member_status: bool = False
    can_view_member_phone: bool = False
    can_view_member_code: bool = False

    # Financial records
    can_access_category_modal: bool = False
    can_add_transaction: bool = False
    can_delete_transaction: bool = False
    can_manage_category_leaders: bool = False

    # Financial payments
    can_create_payment_event: bool = False
    can_edit_payment_event: bool = False
    can_delete_payment_event: bool = False
    can_click_member_names: bool = False

    # Technical
    can_add_weekly_program: bool = False
    can_edit_weekly_program: bool = False
    can_delete_weekly_program: bool = False
    can_select_rehearsal_date: bool = False

    level: int = NO_ACCESS_LEVEL
    role: Optional[str] = None

    @classmethod
    def from_grants(
        cls,
        grants: Iterable[Capability],
        level: int,
        role: Optional[str] = None,
    ) -> "CapabilitySet":
        flags = {Capability(c).value: True for c in grants}
        return cls(level=level, role=role, **flags)

    @classmethod
    def none(cls) -> "CapabilitySet":
        return cls()

    def allows(self, capability: Capability) -> bool:
        return bool(getattr(self, Capability(capability).value))

    def granted(self) -> FrozenSet[Capability]:
        return frozenset(c for c in Capability if self.allows(c))
