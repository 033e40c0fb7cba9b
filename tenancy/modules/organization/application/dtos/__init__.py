from .request import (
    AddUserRequest,
    ChangeMemberRoleRequest,
    CreateOrganizationRequest,
    UpdateOrganizationRequest,
)
from .response import MemberView, OrganizationView

__all__ = [
    "AddUserRequest",
    "ChangeMemberRoleRequest",
    "CreateOrganizationRequest",
    "MemberView",
    "OrganizationView",
    "UpdateOrganizationRequest",
]
