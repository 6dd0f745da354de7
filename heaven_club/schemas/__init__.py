"""
Request and response schemas for the HTTP API.
"""

from heaven_club.schemas.common import BaseSchema, ErrorResponse, SuccessResponse

__all__ = [
    "BaseSchema",
    "ErrorResponse",
    "SuccessResponse",
]
