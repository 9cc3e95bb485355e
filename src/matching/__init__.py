"""
Matching package - candidate selection, interest ledger and match resolution.

Import components from their modules (``src.matching.service`` etc.);
only the error taxonomy is re-exported here.
"""

from src.matching.errors import (
    AuthenticationFailedError,
    ForbiddenError,
    InvalidArgumentError,
    MatchingError,
    NotFoundError,
    RequestTimeoutError,
    UnavailableError,
)

__all__ = [
    "AuthenticationFailedError",
    "ForbiddenError",
    "InvalidArgumentError",
    "MatchingError",
    "NotFoundError",
    "RequestTimeoutError",
    "UnavailableError",
]
