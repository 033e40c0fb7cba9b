from .organization_domain_service import OrganizationDomainService

__all__ = ["OrganizationDomainService"]
