"""
Request parsing and JSON response helpers.
"""

from typing import Any, TypeVar

from aiohttp import web
from pydantic import BaseModel, ValidationError

from heaven_club.schemas.common import MAX_ID, ErrorResponse, SuccessResponse
from heaven_club.utils.exceptions import NotFoundError, RequestValidationError

ModelT = TypeVar("ModelT", bound=BaseModel)


def _describe(exc: ValidationError) -> str:
    parts = []
    for error in exc.errors():
        location = ".".join(str(item) for item in error.get("loc", ()))
        parts.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return "; ".join(parts)


def parse_query(request: web.Request, model: type[ModelT]) -> ModelT:
    """
    Validate query string against a schema.

    Raises:
        RequestValidationError: If validation fails
    """
    try:
        return model.model_validate(dict(request.query))
    except ValidationError as e:
        raise RequestValidationError(f"Invalid query parameters: {_describe(e)}") from e


async def parse_body(request: web.Request, model: type[ModelT]) -> ModelT:
    """
    Validate JSON body against a schema.

    Raises:
        RequestValidationError: If body is not JSON or validation fails
    """
    try:
        payload = await request.json()
    except ValueError as e:
        # Covers JSONDecodeError and bodies that are not UTF-8
        raise RequestValidationError("Request body must be valid JSON") from e

    if not isinstance(payload, dict):
        raise RequestValidationError("Request body must be a JSON object")

    try:
        return model.model_validate(payload)
    except ValidationError as e:
        raise RequestValidationError(f"Invalid request body: {_describe(e)}") from e


def _dump(data: Any) -> Any:
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, list):
        return [_dump(item) for item in data]
    return data


def match_int(request: web.Request, name: str) -> int:
    """
    Integer ID path parameter (routes restrict it to digits).

    Raises:
        NotFoundError: If the value is past the ID column range
    """
    value = int(request.match_info[name])
    if value > MAX_ID:
        raise NotFoundError(f"No record with {name} {value}")
    return value


def json_success(
    data: Any,
    status: int = 200,
    message: str | None = None,
) -> web.Response:
    """Successful envelope response."""
    body = SuccessResponse[Any](data=_dump(data), message=message)
    payload = body.to_json()
    if message is None:
        payload.pop("message")
    return web.json_response(payload, status=status)


def json_error(error: str, error_code: str, status: int) -> web.Response:
    """Failed envelope response."""
    body = ErrorResponse(error=error, error_code=error_code)
    return web.json_response(body.to_json(), status=status)
