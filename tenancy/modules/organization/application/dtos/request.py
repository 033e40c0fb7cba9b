"""
Request schemas for organization use cases.

Validate the shape of command input. Business validation with error codes
happens in the value objects and the domain service.
"""

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator

from tenancy.modules.organization.domain.enums import Role


class BaseRequest(BaseModel):
    """Base request schema."""

    model_config = ConfigDict(extra="ignore")


def _parse_role(value: Any) -> Any:
    if isinstance(value, str) and not isinstance(value, Role):
        try:
            return Role.from_string(value)
        except ValueError:
            return value
    return value


class CreateOrganizationRequest(BaseRequest):
    """Input of organization creation."""

    name: str = Field(..., max_length=255)
    description: str | None = Field(None)
    settings: dict[str, Any] | None = Field(None)


class UpdateOrganizationRequest(BaseRequest):
    """Input of organization update; omitted fields stay unchanged."""

    name: str | None = Field(None, max_length=255)
    description: str | None = Field(None)
    settings: dict[str, Any] | None = Field(None)


class AddUserRequest(BaseRequest):
    role: Role = Field(Role.MEMBER)

    @field_validator("role", mode="before")
    @classmethod
    def normalize_role(cls, value: Any) -> Any:
        return _parse_role(value)


class ChangeMemberRoleRequest(BaseRequest):
    new_role: Role = Field(...)

    @field_validator("new_role", mode="before")
    @classmethod
    def normalize_role(cls, value: Any) -> Any:
        return _parse_role(value)
