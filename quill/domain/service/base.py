"""Base service class for domain services."""

from pydantic import ValidationError as PydanticValidationError


class Service:
    """Base class for all domain services.

    Domain services contain business logic that doesn't naturally belong
    to a single entity or spans multiple entities/aggregates.
    """

    pass


def describe_validation_error(error: PydanticValidationError) -> str:
    """Render pydantic errors as one human-readable line.

    Example: ``title: Field required; excerpt: String should have at most 500 characters``
    """
    parts = []
    for item in error.errors():
        location = ".".join(str(part) for part in item["loc"]) or "value"
        parts.append(f"{location}: {item['msg']}")
    return "; ".join(parts)
