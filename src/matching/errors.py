"""
Matching Errors.

Error taxonomy shared by the matching core and the API boundary.
Only Unavailable and Timeout are safe to retry.
"""


class MatchingError(Exception):
    """Base class for all matching errors."""

    status_code: int = 500
    retryable: bool = False

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message


class NotFoundError(MatchingError):
    """Requested record does not exist."""

    status_code = 404


class InvalidArgumentError(MatchingError):
    """Self-reference or out-of-domain input."""

    status_code = 400


class ForbiddenError(MatchingError):
    """Acting user is not the owner of the resource."""

    status_code = 403


class AuthenticationFailedError(MatchingError):
    """Bearer credential missing, expired or invalid."""

    status_code = 401


class UnavailableError(MatchingError):
    """Store or notifier unreachable."""

    status_code = 503
    retryable = True


class RequestTimeoutError(MatchingError):
    """Operation exceeded the request-scoped timeout."""

    status_code = 504
    retryable = True
