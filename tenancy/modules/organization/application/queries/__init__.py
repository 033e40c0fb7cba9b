from .get_organization_query import GetOrganizationQuery, GetOrganizationQueryHandler

__all__ = ["GetOrganizationQuery", "GetOrganizationQueryHandler"]
