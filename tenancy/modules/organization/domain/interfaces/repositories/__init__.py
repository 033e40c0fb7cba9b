from .organization_repository import IOrganizationRepository
from .user_repository import IUserRepository

__all__ = ["IOrganizationRepository", "IUserRepository"]
