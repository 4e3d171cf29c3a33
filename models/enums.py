from enum import Enum


class BaseStrEnum(str, Enum):
    """
    Base enum that serializes cleanly to a string
    and provides a .list() method for UI dropdowns.
    """

    def __str__(self):
        return str(self.value)

    @classmethod
    def list(cls):
        return [item.value for item in cls]

    @classmethod
    def parse(cls, value):
        """
        Map a raw value from the database onto a member.
        Unknown or missing values return None instead of raising.
        """
        if isinstance(value, cls):
            return value
        try:
            return cls(value)
        except ValueError:
            return None


# -----------------------------------------------------
# PRINCIPAL TYPE
# -----------------------------------------------------
class PrincipalType(BaseStrEnum):
    """Which authentication domain a principal belongs to."""

    admin = "admin"
    member = "member"


# -----------------------------------------------------
# ADMIN PERMISSION LEVEL (system_admins.permission_level)
# -----------------------------------------------------
class AdminPermissionLevel(BaseStrEnum):
    super_admin = "super_admin"  # system owner
    admin_principal = "admin_principal"
    admin_adjunto = "admin_adjunto"
    admin_supervisor = "admin_supervisor"


# -----------------------------------------------------
# MEMBER ROLE (members.role)
# -----------------------------------------------------
class MemberRole(BaseStrEnum):
    presidente = "presidente"
    vice_presidente = "vice_presidente"
    secretario = "secretario"
    tesoureiro = "tesoureiro"
    coordenador = "coordenador"
    conselheiro = "conselheiro"
    membro = "membro"


# -----------------------------------------------------
# CATEGORY ROLE (category_roles.role)
# -----------------------------------------------------
class CategoryRole(BaseStrEnum):
    """Role a member holds inside one financial category."""

    presidente = "presidente"
    secretario = "secretario"
    auxiliar = "auxiliar"


# -----------------------------------------------------
# CAPABILITIES
# -----------------------------------------------------
class Capability(BaseStrEnum):
    """
    Closed set of UI capabilities. Values match the field
    names on models.capabilities.CapabilitySet.
    """

    # Navigation
    can_access_new_member = "can_access_new_member"
    can_access_reports = "can_access_reports"
    can_access_admins = "can_access_admins"
    can_access_settings = "can_access_settings"
    can_access_monthly_plans = "can_access_monthly_plans"

    # Groups
    can_create_group = "can_create_group"
    can_edit_group = "can_edit_group"
    can_delete_group = "can_delete_group"
    can_add_member = "can_add_member"
    can_view_group_financial_info = "can_view_group_financial_info"

    # Group details
    can_edit_group_details = "can_edit_group_details"
    can_view_monthly_plans = "can_view_monthly_plans"
    can_view_monthly_cost = "can_view_monthly_cost"
    can_view_access_code = "can_view_access_code"

    # Members
    can_edit_member = "can_edit_member"
    can_toggle_member_status = "can_toggle_member_status"
    can_view_member_phone = "can_view_member_phone"
    can_view_member_code = "can_view_member_code"

    # Financial records
    can_access_category_modal = "can_access_category_modal"
    can_add_transaction = "can_add_transaction"
    can_delete_transaction = "can_delete_transaction"
    can_manage_category_leaders = "can_manage_category_leaders"

    # Financial payments
    can_create_payment_event = "can_create_payment_event"
    can_edit_payment_event = "can_edit_payment_event"
    can_delete_payment_event = "can_delete_payment_event"
    can_click_member_names = "can_click_member_names"

    # Technical
    can_add_weekly_program = "can_add_weekly_program"
    can_edit_weekly_program = "can_edit_weekly_program"
    can_delete_weekly_program = "can_delete_weekly_program"
    can_select_rehearsal_date = "can_select_rehearsal_date"
