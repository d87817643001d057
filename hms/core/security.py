"""
Core security utilities for password hashing and bearer token handling.

Both services are immutable once built and hold no per-request state, so a
single instance is shared by every request.
"""
from datetime import datetime, timedelta, timezone
from typing import Optional, Dict, Any
from jose import jwt, JWTError, ExpiredSignatureError
from passlib.context import CryptContext
import logging

from ..auth.models import UserRole
from ..auth.exceptions import InvalidTokenException, TokenExpiredException

# Set up logging
logger = logging.getLogger(__name__)

HMAC_ALGORITHMS = ("HS256", "HS384", "HS512")
REQUIRED_CLAIMS = ("sub", "role", "iat", "exp")


class PasswordHasher:
    """
    One-way password hashing using bcrypt via passlib.

    Args:
        rounds: bcrypt cost factor
    """
    def __init__(self, rounds: int = 12):
        self._context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=rounds)

    def hash(self, password: str) -> str:
        """
        Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            str: Hashed password
        """
        return self._context.hash(password)

    def verify(self, plain_password: str, hashed_password: str) -> bool:
        """
        Verify a password against a hash.

        Args:
            plain_password: Plain text password
            hashed_password: Hashed password to compare against

        Returns:
            bool: True if password matches hash
        """
        return self._context.verify(plain_password, hashed_password)

    def dummy_verify(self) -> None:
        """Spend the time of a real verification when there is no hash to check."""
        self._context.dummy_verify()


class TokenService:
    """
    Issues and validates HMAC-signed JWT bearer tokens.

    Token payload: ``sub`` (email), ``role``, ``iat`` and ``exp`` as epoch
    seconds, plus any extra claims given at issue time. Validity depends only
    on the signature and the expiry, nothing is stored server side.

    Args:
        secret_key: HMAC signing key
        algorithm: One of HS256, HS384, HS512
        expires_delta: Default token lifetime
    """
    def __init__(self, secret_key: str, algorithm: str = "HS256", expires_delta: timedelta = timedelta(hours=24)):
        if not secret_key:
            raise ValueError("Token signing key must not be empty")
        if algorithm not in HMAC_ALGORITHMS:
            raise ValueError(f"Unsupported token algorithm {algorithm!r}; expected one of {HMAC_ALGORITHMS}")
        self._secret_key = secret_key
        self.algorithm = algorithm
        self.expires_delta = expires_delta

    def issue(
        self,
        subject: str,
        role: UserRole,
        extra_claims: Optional[Dict[str, Any]] = None,
        expires_delta: Optional[timedelta] = None
    ) -> str:
        """
        Create a signed access token.

        Args:
            subject: Identity reference (the user's email)
            role: Role claim
            extra_claims: Additional claims; cannot override the standard ones
            expires_delta: Lifetime override, the configured TTL when omitted

        Returns:
            str: Encoded JWT token
        """
        now = datetime.now(timezone.utc)
        expire = now + (expires_delta if expires_delta is not None else self.expires_delta)

        to_encode = dict(extra_claims or {})
        to_encode.update({
            "sub": subject,
            "role": UserRole(role).value,
            "iat": int(now.timestamp()),
            "exp": int(expire.timestamp()),
        })
        return jwt.encode(to_encode, self._secret_key, algorithm=self.algorithm)

    def validate(self, token: Optional[str]) -> Dict[str, Any]:
        """
        Verify and decode a token.

        The signature is checked before any claim is read.

        Args:
            token: Encoded JWT token

        Returns:
            Dict containing the verified claims

        Raises:
            TokenExpiredException: If the token is past its expiry
            InvalidTokenException: If the token is missing, malformed or forged
        """
        if not token:
            raise InvalidTokenException("Not authenticated")

        try:
            payload = jwt.decode(token, self._secret_key, algorithms=[self.algorithm])
        except ExpiredSignatureError:
            raise TokenExpiredException()
        except JWTError as e:
            logger.info(f"Rejected bearer token: {e}")
            raise InvalidTokenException()

        missing = [claim for claim in REQUIRED_CLAIMS if claim not in payload]
        if missing:
            raise InvalidTokenException(f"Token is missing claims: {missing}")
        if not isinstance(payload["sub"], str) or not payload["sub"]:
            raise InvalidTokenException("Token subject is invalid")
        if payload["role"] not in {role.value for role in UserRole}:
            raise InvalidTokenException("Token role is invalid")
        if not isinstance(payload["exp"], (int, float)):
            raise InvalidTokenException("Token expiry is invalid")

        # Expiry instant itself is already outside the validity window
        if datetime.now(timezone.utc).timestamp() >= payload["exp"]:
            raise TokenExpiredException()

        return payload
