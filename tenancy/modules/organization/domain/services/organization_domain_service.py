"""
Organization Domain Service

Business rules that need information beyond a single organization:
name uniqueness, join eligibility, settings policy, merging and ownership
transfer. Policy limits come from the injected ``MembershipPolicy``.
"""

from tenancy.core.config import MembershipPolicy
from tenancy.core.domain.base import DomainService

from ..aggregates.organization import Organization
from ..enums import Role
from ..errors import (
    InactiveUserError,
    InvalidSettingsError,
    MergeRejectedError,
    OrganizationNotFoundError,
    OwnershipTransferError,
    SettingsExceedCurrentMembersError,
    UserCannotJoinError,
    UserNotFoundError,
    UserOrganizationLimitError,
)
from ..interfaces.repositories import IOrganizationRepository, IUserRepository
from ..value_objects import (
    OrganizationId,
    OrganizationName,
    OrganizationSettings,
    UserId,
)


class OrganizationDomainService(DomainService):
    """Domain service for rules spanning organizations and users."""

    def __init__(
        self,
        organization_repository: IOrganizationRepository,
        user_repository: IUserRepository,
        policy: MembershipPolicy | None = None,
    ):
        self._organization_repository = organization_repository
        self._user_repository = user_repository
        self._policy = policy or MembershipPolicy()

    @property
    def policy(self) -> MembershipPolicy:
        return self._policy

    # =========================================================================
    # Uniqueness and eligibility
    # =========================================================================

    async def is_organization_name_available(self, name: OrganizationName) -> bool:
        return not await self._organization_repository.exists_by_name(name)

    async def validate_user_can_join_organization(
        self, user_id: UserId, organization_id: OrganizationId
    ) -> None:
        """
        Check that a user may join another organization.

        Raises:
            UserNotFoundError: If the user does not exist
            UserCannotJoinError: If the user is not active or unverified
            UserOrganizationLimitError: If the user is at the organization limit
        """
        user = await self._user_repository.find_by_id(user_id)
        if user is None:
            raise UserNotFoundError(user_id)

        if not user.can_join_organizations():
            reason = "email not verified" if user.is_active() else f"status {user.status.value}"
            raise UserCannotJoinError(user_id, reason)

        memberships = await self._organization_repository.find_by_member_user_id(user_id)
        limit = self._policy.max_organizations_per_user
        if len(memberships) >= limit:
            raise UserOrganizationLimitError(user_id, limit)

    # =========================================================================
    # Settings policy
    # =========================================================================

    async def validate_organization_settings(
        self, settings: OrganizationSettings, organization_id: OrganizationId
    ) -> None:
        """
        Check settings against policy and the organization's current state.

        Raises:
            InvalidSettingsError: If a value is malformed or out of range
            OrganizationNotFoundError: If the organization does not exist
            SettingsExceedCurrentMembersError: If the member limit is below
                the current member count
        """
        max_members = self._requested_member_limit(settings)
        if max_members is not None:
            self._validate_member_limit(max_members)

            organization = await self._organization_repository.find_by_id(organization_id)
            if organization is None:
                raise OrganizationNotFoundError(organization_id)
            if organization.member_count > max_members:
                raise SettingsExceedCurrentMembersError(
                    "organization",
                    organization_id,
                    max_members,
                    organization.member_count,
                )

        self._validate_default_role(settings)

    def validate_settings_policy(self, settings: OrganizationSettings) -> None:
        """
        Check settings against policy alone, for organizations not yet stored.

        Raises:
            InvalidSettingsError: If a value is malformed or out of range
        """
        max_members = self._requested_member_limit(settings)
        if max_members is not None:
            self._validate_member_limit(max_members)
        self._validate_default_role(settings)

    def _requested_member_limit(self, settings: OrganizationSettings) -> int | None:
        if not settings.has(OrganizationSettings.MAX_MEMBERS):
            return None
        if settings.max_members is None:
            raise InvalidSettingsError(
                "settings.maxMembers.invalid",
                "Maximum members must be a whole number",
                setting=OrganizationSettings.MAX_MEMBERS,
                value=settings.get(OrganizationSettings.MAX_MEMBERS),
            )
        return settings.max_members

    def _validate_member_limit(self, max_members: int) -> None:
        if max_members < self._policy.min_members_limit:
            raise InvalidSettingsError(
                "settings.maxMembers.tooLow",
                f"Maximum members must be at least {self._policy.min_members_limit}",
                setting=OrganizationSettings.MAX_MEMBERS,
                value=max_members,
            )
        if max_members > self._policy.max_members_limit:
            raise InvalidSettingsError(
                "settings.maxMembers.tooHigh",
                f"Maximum members cannot exceed {self._policy.max_members_limit}",
                setting=OrganizationSettings.MAX_MEMBERS,
                value=max_members,
            )

    def _validate_default_role(self, settings: OrganizationSettings) -> None:
        if not settings.has(OrganizationSettings.DEFAULT_USER_ROLE):
            return
        raw = settings.get(OrganizationSettings.DEFAULT_USER_ROLE)
        try:
            Role.from_string(str(raw))
        except ValueError as e:
            raise InvalidSettingsError(
                "settings.defaultRole.invalid",
                f"Invalid default role: {raw}",
                setting=OrganizationSettings.DEFAULT_USER_ROLE,
                value=raw,
            ) from e

    def has_reached_organization_limits(self, organization: Organization) -> bool:
        limit = organization.settings.max_members
        return limit is not None and organization.member_count >= limit

    def suggest_role_for_new_member(
        self, organization: Organization, user_id: UserId
    ) -> Role:
        """The organization's default role for new members."""
        return Role.from_string(organization.settings.default_user_role)

    # =========================================================================
    # Merge
    # =========================================================================

    def validate_organization_merge(
        self, source: Organization, target: Organization, requesting_user_id: UserId
    ) -> list[str]:
        """Return every reason the merge is not allowed; empty when allowed."""
        violations = []
        if source.id == target.id:
            violations.append("Source and target organizations must differ")
        if not source.has_role(requesting_user_id, Role.OWNER):
            violations.append("User must be owner of source organization")
        if not target.has_role(requesting_user_id, Role.OWNER):
            violations.append("User must be owner of target organization")
        if not source.is_active():
            violations.append("Source organization is not active")
        if not target.is_active():
            violations.append("Target organization is not active")

        limit = target.settings.max_members
        if limit is not None and target.member_count + source.member_count > limit:
            violations.append("Merge would exceed target organization's member limit")
        return violations

    def merge_organizations(
        self, source: Organization, target: Organization, requesting_user_id: UserId
    ) -> Organization:
        """
        Move every member of ``source`` into ``target`` and deactivate ``source``.

        A user present in both keeps the higher of the two roles; on a tie
        the target's role stays.

        Raises:
            MergeRejectedError: If any merge rule is violated; neither
                organization is modified
        """
        violations = self.validate_organization_merge(source, target, requesting_user_id)
        if violations:
            raise MergeRejectedError(violations)

        for member in source.get_members():
            existing = target.get_user_role(member.user_id)
            if existing is None:
                target.add_user(member.user_id, member.role)
            elif member.role > existing:
                target.update_user_role(member.user_id, member.role)

        source.deactivate()
        return target

    # =========================================================================
    # Ownership
    # =========================================================================

    async def transfer_ownership(
        self, organization: Organization, current_owner_id: UserId, new_owner_id: UserId
    ) -> None:
        """
        Make ``new_owner_id`` an owner, then demote the current owner to admin.

        Raises:
            OwnershipTransferError: If the current user is not an owner
            UserNotFoundError: If the new owner does not exist
            InactiveUserError: If the new owner is not active
        """
        if not organization.has_role(current_owner_id, Role.OWNER):
            raise OwnershipTransferError(
                "organization.transfer.notOwner",
                "Only owners can transfer ownership",
                details={
                    "organization_id": str(organization.id),
                    "user_id": str(current_owner_id),
                },
            )

        new_owner = await self._user_repository.find_by_id(new_owner_id)
        if new_owner is None:
            raise UserNotFoundError(new_owner_id)
        if not new_owner.is_active():
            raise InactiveUserError(new_owner_id)

        if organization.is_member(new_owner_id):
            organization.update_user_role(new_owner_id, Role.OWNER)
        else:
            organization.add_user(new_owner_id, Role.OWNER)
        organization.update_user_role(current_owner_id, Role.ADMIN)

    def __str__(self) -> str:
        return "OrganizationDomainService"
