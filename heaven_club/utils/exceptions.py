"""
Exception types for the referral network service.

Every exception carries an ``error_code`` that the HTTP layer returns to
the caller. Status codes are assigned in ``heaven_club.web.middlewares``.
"""


class NetworkServiceError(Exception):
    """Base class for all service errors."""

    error_code = "service_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class NotFoundError(NetworkServiceError):
    """Raised when a member or claim does not exist."""

    error_code = "not_found"


class DataIntegrityError(NetworkServiceError):
    """
    Raised when the referral graph is not a forest.

    Covers cycles, edges pointing at missing recruiters, and traversals
    that exceed their depth or node caps.
    """

    error_code = "data_integrity"


class RequestValidationError(NetworkServiceError):
    """Raised when request parameters or body fail validation."""

    error_code = "invalid_request"


class InvalidReferralCodeError(NetworkServiceError):
    """Raised when a referral code is unknown or not a club member's."""

    error_code = "invalid_referral_code"


class DuplicateMemberError(NetworkServiceError):
    """Raised when signing up with an email that is already registered."""

    error_code = "duplicate_member"


class InvalidRewardLevelError(NetworkServiceError):
    """Raised when claiming a level that carries no reward."""

    error_code = "invalid_reward_level"


class InvalidClaimStatusError(NetworkServiceError):
    """Raised when an admin sets an unsupported claim status."""

    error_code = "invalid_claim_status"


class DuplicateClaimError(NetworkServiceError):
    """Raised when a reward tier was already claimed."""

    error_code = "duplicate_claim"


class TierNotCompletedError(NetworkServiceError):
    """Raised when claiming a tier whose target is not reached."""

    error_code = "tier_not_completed"
