"""
Services.

Business logic layer.
"""

from heaven_club.services.base_service import BaseService, transaction

__all__ = [
    "BaseService",
    "transaction",
]
