# folio/app/schemas/base.py
from typing import Any, Type, TypeVar

from fastapi import HTTPException, status
from pydantic import BaseModel, ConfigDict, ValidationError
from pydantic.alias_generators import to_camel

from folio.app.core.errors import first_error_message

ModelT = TypeVar("ModelT", bound=BaseModel)


class CamelModel(BaseModel):
    """
    Base schema for everything that crosses the wire.

    JSON keys are camelCase (isPublished, phoneNumber, ...); Python code
    uses snake_case. Both spellings are accepted on input.
    """
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


def decode(schema: Type[ModelT], data: Any) -> ModelT:
    """
    Validate a raw body (parsed JSON or form fields) against a schema.

    Raises a 400 carrying the first validation problem as one line,
    e.g. "title is required".
    """
    try:
        return schema.model_validate(data)
    except ValidationError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=first_error_message(exc.errors()),
        )
