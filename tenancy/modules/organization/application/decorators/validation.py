"""
Validation decorators for command and query handlers.

Checks the shape of handler input against a pydantic schema before any
transaction is opened.
"""

from collections.abc import Callable
from functools import wraps

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from tenancy.core.cqrs import Command, Query
from tenancy.core.errors import ValidationError


def validate_input(schema: type[BaseModel]) -> Callable:
    """
    Decorator to validate command/query input.

    Attributes of the request named like schema fields are validated and
    replaced by their coerced values.

    Args:
        schema: Pydantic schema for validation
    """

    def decorator(func: Callable) -> Callable:
        @wraps(func)
        async def wrapper(self, request: Command | Query, *args, **kwargs):
            request_dict = {
                name: getattr(request, name)
                for name in schema.model_fields
                if hasattr(request, name)
            }

            try:
                validated = schema.model_validate(request_dict)
            except PydanticValidationError as e:
                raise ValidationError.from_fields(
                    _field_errors(e), code="input.invalid"
                ) from e

            for name in request_dict:
                setattr(request, name, getattr(validated, name))

            return await func(self, request, *args, **kwargs)

        return wrapper

    return decorator


def _field_errors(error: PydanticValidationError) -> dict[str, list[str]]:
    field_errors: dict[str, list[str]] = {}
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "__root__"
        field_errors.setdefault(location, []).append(item["msg"])
    return field_errors
