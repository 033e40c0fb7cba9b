from .member import Member, OrganizationMember, TeamMember
from .user import User

__all__ = ["Member", "OrganizationMember", "TeamMember", "User"]
