"""
Identity Provider.

Maps a bearer JWT to an authenticated user ID.
"""

import jwt
from loguru import logger

from src.matching.errors import AuthenticationFailedError

auth_log = logger.bind(module="Auth")


class IdentityProvider:
    """Verifies signed access tokens."""

    def __init__(self, secret: str, algorithm: str = "HS256"):
        """
        Initialize identity provider.

        Args:
            secret: JWT signing secret
            algorithm: JWT algorithm
        """
        self._secret = secret
        self._algorithm = algorithm

    def verify(self, token: str) -> str:
        """
        Decode and verify a JWT token.

        Args:
            token: JWT token string

        Returns:
            Authenticated user ID

        Raises:
            AuthenticationFailedError: If expired, invalid or without subject
        """
        try:
            payload = jwt.decode(token, self._secret, algorithms=[self._algorithm])
        except jwt.ExpiredSignatureError:
            auth_log.warning("Token expired")
            raise AuthenticationFailedError("Token expired") from None
        except jwt.InvalidTokenError as e:
            auth_log.warning(f"Invalid token: {e}")
            raise AuthenticationFailedError("Invalid token") from None

        uid = payload.get("sub")
        if not uid or not isinstance(uid, str):
            raise AuthenticationFailedError("Token has no subject")
        return uid
