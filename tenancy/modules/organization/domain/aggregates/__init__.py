from .application import Application
from .organization import Organization
from .roled_membership import RoledMembershipAggregate
from .team import Team
from .tenant import TenantAggregate

__all__ = [
    "Application",
    "Organization",
    "RoledMembershipAggregate",
    "Team",
    "TenantAggregate",
]
