"""Organization module repository implementations."""

from .in_memory_organization_repository import InMemoryOrganizationRepository
from .in_memory_user_repository import InMemoryUserRepository

__all__ = ["InMemoryOrganizationRepository", "InMemoryUserRepository"]
