"""
Security Utilities

Password hashing and JWT token management.

Password Hashing:
=================
bcrypt via passlib. Hashes produced by other bcrypt implementations
($2a$ / $2b$ prefixes, e.g. the seeded admin account) verify as well.

JWT Tokens:
===========
HS256 tokens via PyJWT. Claims issued for a user:

    {
        "user_id": 7,
        "username": "jane_doe",
        "email": "jane@example.com",
        "role": "user",
        "iat": 1740909000,
        "exp": 1740995400
    }

Usage:
======
    from media_platform.utils.security import SecurityUtils

    hashed = SecurityUtils.hash_password("s3cret")
    SecurityUtils.verify_password("s3cret", hashed)  # True

    token = SecurityUtils.create_access_token(
        data=SecurityUtils.user_claims(user),
        secret_key=settings.SECRET_KEY,
        expires_delta=timedelta(hours=24),
    )
    payload = SecurityUtils.decode_access_token(token, settings.SECRET_KEY)
"""

from datetime import datetime, timedelta, timezone
from typing import Any, Optional

import jwt
from passlib.context import CryptContext


pwd_context = CryptContext(
    schemes=["bcrypt"],
    deprecated="auto",
)

REQUIRED_CLAIMS = ("user_id", "role", "exp", "iat")


class SecurityUtils:
    """Password hashing and JWT helpers."""

    # ═══════════════════════════════════════════════════════════════════════════
    # PASSWORD HASHING
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def hash_password(password: str) -> str:
        """Hash password using bcrypt (salt included in the result)."""
        return pwd_context.hash(password)

    @staticmethod
    def verify_password(plain_password: str, hashed_password: str) -> bool:
        """
        Verify password against a bcrypt hash.

        Malformed hashes count as a mismatch rather than an error.
        """
        try:
            return pwd_context.verify(plain_password, hashed_password)
        except ValueError:
            return False

    # ═══════════════════════════════════════════════════════════════════════════
    # JWT TOKENS
    # ═══════════════════════════════════════════════════════════════════════════

    @staticmethod
    def user_claims(user: Any) -> dict[str, Any]:
        """Identity claims for a User (iat/exp are added at encode time)."""
        return {
            "user_id": user.id,
            "username": user.username,
            "email": user.email,
            "role": user.role,
        }

    @staticmethod
    def create_access_token(
        data: dict,
        secret_key: str,
        expires_delta: Optional[timedelta] = None,
        algorithm: str = "HS256",
    ) -> str:
        """
        Create a signed JWT.

        Args:
            data: Payload claims (see user_claims())
            secret_key: Secret key for signing
            expires_delta: Lifetime of the token (default: 24 hours)
            algorithm: JWT algorithm (default: HS256)

        Returns:
            Encoded JWT token string
        """
        to_encode = data.copy()
        issued_at = datetime.now(timezone.utc)
        to_encode.update({
            "iat": issued_at,
            "exp": issued_at + (expires_delta or timedelta(hours=24)),
        })
        return jwt.encode(to_encode, secret_key, algorithm=algorithm)

    @staticmethod
    def decode_access_token(
        token: str,
        secret_key: str,
        algorithm: str = "HS256",
    ) -> dict:
        """
        Decode and verify a JWT.

        Raises:
            ValueError: If the token is expired, tampered with, or missing
                one of user_id / role / iat / exp
        """
        try:
            return jwt.decode(
                token,
                secret_key,
                algorithms=[algorithm],
                options={"require": list(REQUIRED_CLAIMS)},
            )
        except jwt.ExpiredSignatureError:
            raise ValueError("Token has expired")
        except jwt.InvalidTokenError as e:
            raise ValueError(f"Invalid token: {str(e)}")
