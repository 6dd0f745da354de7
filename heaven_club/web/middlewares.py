"""
HTTP middlewares.

Maps service exceptions to JSON error responses and opens one database
session per request.
"""

from collections.abc import Awaitable, Callable

from aiohttp import web
from loguru import logger

from heaven_club.utils.exceptions import (
    DataIntegrityError,
    DuplicateClaimError,
    DuplicateMemberError,
    InvalidClaimStatusError,
    InvalidReferralCodeError,
    InvalidRewardLevelError,
    NetworkServiceError,
    NotFoundError,
    RequestValidationError,
    TierNotCompletedError,
)
from heaven_club.web.keys import SESSION_KEY, SESSION_MAKER_KEY
from heaven_club.web.responses import json_error

Handler = Callable[[web.Request], Awaitable[web.StreamResponse]]

ERROR_STATUS: dict[type[NetworkServiceError], int] = {
    NotFoundError: 404,
    DataIntegrityError: 500,
    RequestValidationError: 400,
    InvalidReferralCodeError: 404,
    DuplicateMemberError: 409,
    InvalidRewardLevelError: 400,
    InvalidClaimStatusError: 400,
    DuplicateClaimError: 409,
    TierNotCompletedError: 403,
}


def status_for(exc: NetworkServiceError) -> int:
    """HTTP status for a service exception."""
    for exc_type in type(exc).__mro__:
        if exc_type in ERROR_STATUS:
            return ERROR_STATUS[exc_type]
    return 500


@web.middleware
async def error_middleware(
    request: web.Request, handler: Handler
) -> web.StreamResponse:
    """Convert exceptions into the error envelope."""
    try:
        return await handler(request)
    except NetworkServiceError as e:
        status = status_for(e)
        if status >= 500:
            logger.error(
                f"{request.method} {request.path} failed: "
                f"{e.error_code}: {e.message}"
            )
        else:
            logger.info(
                f"{request.method} {request.path} rejected ({status}): {e.message}"
            )
        return json_error(e.message, e.error_code, status)
    except web.HTTPException as e:
        if e.status < 400:
            raise
        return json_error(e.reason, "http_error", e.status)
    except Exception:
        logger.exception(f"Unhandled error in {request.method} {request.path}")
        return json_error("Internal Server Error", "internal_error", 500)


@web.middleware
async def session_middleware(
    request: web.Request, handler: Handler
) -> web.StreamResponse:
    """Open a database session for the duration of the request."""
    session_maker = request.app[SESSION_MAKER_KEY]
    async with session_maker() as session:
        request[SESSION_KEY] = session
        return await handler(request)
