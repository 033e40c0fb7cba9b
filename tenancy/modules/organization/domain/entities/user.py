"""
User Entity

The slice of a user account the organization module needs: profile, status
and e-mail verification, which together decide join eligibility.
"""

from datetime import datetime

from tenancy.core.domain.base import Entity

from ..enums import UserStatus
from ..errors import UserBannedError
from ..value_objects import EmailAddress, PersonName, UserId


class User(Entity):
    """User account referenced by organization membership."""

    def __init__(
        self,
        user_id: UserId,
        email: EmailAddress,
        first_name: PersonName,
        last_name: PersonName,
        status: UserStatus = UserStatus.ACTIVE,
        email_verified: bool = False,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ):
        super().__init__(user_id, created_at, updated_at)
        self.email = email
        self.first_name = first_name
        self.last_name = last_name
        self.status = status
        self.email_verified = email_verified

    @classmethod
    def register(
        cls, email: str, first_name: str, last_name: str
    ) -> "User":
        """Create an active user whose e-mail address is not yet verified."""
        return cls(
            user_id=UserId.generate(),
            email=EmailAddress(email),
            first_name=PersonName(first_name),
            last_name=PersonName(last_name),
        )

    # =========================================================================
    # Profile
    # =========================================================================

    @property
    def user_id(self) -> UserId:
        return self.id

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}"

    @property
    def display_name(self) -> str:
        """First name and last initial, e.g. ``Ada L.``."""
        return f"{self.first_name} {self.last_name.initial}."

    def update_profile(self, first_name: PersonName, last_name: PersonName) -> None:
        if (first_name, last_name) == (self.first_name, self.last_name):
            return
        self.first_name = first_name
        self.last_name = last_name
        self.mark_modified()

    def change_email(self, email: EmailAddress) -> None:
        """Change the address; the new address must be verified again."""
        if email == self.email:
            return
        self.email = email
        self.email_verified = False
        self.mark_modified()

    def verify_email(self) -> None:
        if self.email_verified:
            return
        self.email_verified = True
        self.mark_modified()

    # =========================================================================
    # Status
    # =========================================================================

    def suspend(self) -> None:
        if self.status == UserStatus.SUSPENDED:
            return
        self.status = UserStatus.SUSPENDED
        self.mark_modified()

    def reactivate(self) -> None:
        """
        Return a suspended or pending user to active.

        Raises:
            UserBannedError: If the user has been banned
        """
        if self.status == UserStatus.ACTIVE:
            return
        if self.status == UserStatus.BANNED:
            raise UserBannedError(self.id)
        self.status = UserStatus.ACTIVE
        self.mark_modified()

    def ban(self) -> None:
        if self.status == UserStatus.BANNED:
            return
        self.status = UserStatus.BANNED
        self.mark_modified()

    def is_active(self) -> bool:
        return self.status == UserStatus.ACTIVE

    def can_join_organizations(self) -> bool:
        """Active users with a verified e-mail address may join."""
        return self.status.allows_membership and self.email_verified

    def __repr__(self) -> str:
        return f"User(id={self.id}, email={self.email}, status={self.status.value})"
