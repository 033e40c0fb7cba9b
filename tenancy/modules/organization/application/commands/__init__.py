from .add_user_to_organization_command import (
    AddUserToOrganizationCommand,
    AddUserToOrganizationCommandHandler,
)
from .change_member_role_command import (
    ChangeMemberRoleCommand,
    ChangeMemberRoleCommandHandler,
)
from .create_organization_command import (
    CreateOrganizationCommand,
    CreateOrganizationCommandHandler,
)
from .remove_user_from_organization_command import (
    RemoveUserFromOrganizationCommand,
    RemoveUserFromOrganizationCommandHandler,
)
from .transfer_ownership_command import (
    TransferOwnershipCommand,
    TransferOwnershipCommandHandler,
)
from .update_organization_command import (
    UpdateOrganizationCommand,
    UpdateOrganizationCommandHandler,
)

__all__ = [
    "AddUserToOrganizationCommand",
    "AddUserToOrganizationCommandHandler",
    "ChangeMemberRoleCommand",
    "ChangeMemberRoleCommandHandler",
    "CreateOrganizationCommand",
    "CreateOrganizationCommandHandler",
    "RemoveUserFromOrganizationCommand",
    "RemoveUserFromOrganizationCommandHandler",
    "TransferOwnershipCommand",
    "TransferOwnershipCommandHandler",
    "UpdateOrganizationCommand",
    "UpdateOrganizationCommandHandler",
]
