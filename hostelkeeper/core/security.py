"""
JWT token management

Tokens are issued elsewhere; this module decodes them for request
authentication and creates them for tooling and tests.
"""

import secrets
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional

import jwt

from hostelkeeper.config.settings import settings

from .exceptions import AuthenticationError
from .logging import get_logger

logger = get_logger(__name__)


class TokenManager:
    """JWT token management utilities"""

    @staticmethod
    def create_token(
        subject: str,
        role: str,
        expires_delta: Optional[timedelta] = None,
        extra_claims: Optional[Dict[str, Any]] = None,
    ) -> str:
        """
        Create an access token.

        Args:
            subject: User id stored in ``sub``
            role: Role claim
            expires_delta: Custom expiration time
            extra_claims: Additional claims merged into the payload
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta or timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES))

        to_encode: Dict[str, Any] = dict(extra_claims or {})
        to_encode.update({
            "sub": subject,
            "role": role,
            "exp": expire,
            "iat": now,
            "jti": secrets.token_urlsafe(16),
        })
        return jwt.encode(to_encode, settings.JWT_SECRET_KEY, algorithm=settings.JWT_ALGORITHM)

    @staticmethod
    def verify_token(token: str) -> Dict[str, Any]:
        """
        Verify and decode a token.

        Raises:
            AuthenticationError: If the token is expired, malformed or
                missing its subject
        """
        try:
            payload = jwt.decode(token, settings.JWT_SECRET_KEY, algorithms=[settings.JWT_ALGORITHM])
        except jwt.ExpiredSignatureError:
            raise AuthenticationError("Token has expired")
        except jwt.InvalidTokenError as e:
            logger.warning(f"Token verification failed: {str(e)}")
            raise AuthenticationError("Invalid token")

        if not payload.get("sub"):
            raise AuthenticationError("Invalid token")
        return payload


def create_access_token(subject: str, role: str, expires_delta: Optional[timedelta] = None) -> str:
    return TokenManager.create_token(subject, role, expires_delta)


def decode_access_token(token: str) -> Dict[str, Any]:
    return TokenManager.verify_token(token)
