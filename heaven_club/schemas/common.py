"""
Base schema classes and the response envelope.

Every HTTP response is one of two tagged shapes:
``{"success": true, "data": ...}`` or
``{"success": false, "error": "...", "errorCode": "..."}``.
"""

from typing import Any, Generic, Literal, TypeVar

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

DataT = TypeVar("DataT")

# Largest value of the INTEGER primary key columns
MAX_ID = 2**31 - 1


class BaseSchema(BaseModel):
    """
    Base schema with camelCase aliases.

    Fields are declared in snake_case and exchanged as camelCase JSON.
    """

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
        str_strip_whitespace=True,
    )

    def to_json(self) -> dict[str, Any]:
        """JSON-ready dict with camelCase keys."""
        return self.model_dump(mode="json", by_alias=True)


class SuccessResponse(BaseSchema, Generic[DataT]):
    """Successful response envelope."""

    success: Literal[True] = True
    data: DataT
    message: str | None = Field(default=None, description="Human readable note")


class ErrorResponse(BaseSchema):
    """Failed response envelope."""

    success: Literal[False] = False
    error: str
    error_code: str
