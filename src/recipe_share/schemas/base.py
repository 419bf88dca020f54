"""Base schema configuration for all Pydantic models.

Usage:
    - RecordInput: payloads accepted by create/update operations
    - RecordData: read models returned to callers

Both serialize with camelCase names (``profileImage``, ``favoritesCount``)
and accept either camelCase or snake_case on input.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Annotated, Any, TypeVar

from pydantic import BaseModel, ConfigDict, StringConstraints
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from recipe_share.core.exceptions import ValidationException


NonBlankStr = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=255),
]
NonBlankText = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TagStr = Annotated[
    str,
    StringConstraints(strip_whitespace=True, min_length=1, max_length=100),
]


class _BaseSchema(BaseModel):
    """Private base schema with common configuration.

    Do not use directly - inherit from one of the public subclasses.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        use_enum_values=True,
        validate_default=True,
        validate_assignment=True,
        serialize_by_alias=True,
    )


class RecordInput(_BaseSchema):
    """Base class for create/update payloads.

    Unknown fields are ignored so callers can pass request bodies through.
    """

    model_config = ConfigDict(
        extra="ignore",
    )


class RecordData(_BaseSchema):
    """Base class for read models.

    Only explicitly declared fields may appear.
    """

    model_config = ConfigDict(
        extra="forbid",
    )


InputT = TypeVar("InputT", bound=RecordInput)


def parse_input(
    model: type[InputT],
    data: InputT | Mapping[str, Any],
    resource: str,
) -> InputT:
    """Validate ``data`` as ``model``.

    Raises:
        ValidationException: If required fields are missing or empty.
    """
    if isinstance(data, model):
        return data
    try:
        return model.model_validate(data)
    except PydanticValidationError as e:
        raise ValidationException.from_pydantic(e, resource) from e
