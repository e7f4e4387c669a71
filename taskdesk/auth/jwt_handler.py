"""
JWT token handler.

Issues and validates the signed bearer tokens used by the API.
Tokens are stateless: nothing is stored server-side and they cannot be
revoked before they expire.
"""

import os
import time
import logging
from typing import Optional
from dataclasses import dataclass, asdict

from jose import jwt, JWTError

logger = logging.getLogger(__name__)

# Token configuration
DEFAULT_SECRET_KEY = "taskdesk-secret-key-change-in-production"
ALGORITHM = "HS256"
ACCESS_TOKEN_EXPIRE_SECONDS = 86400 * 30  # 30 days


@dataclass
class TokenPayload:
    """JWT token payload."""
    user_id: str
    exp: int  # Expiration timestamp
    iat: int  # Issued at timestamp
    token_type: str = "access"

    def to_dict(self) -> dict:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: dict) -> "TokenPayload":
        return cls(
            user_id=str(data["user_id"]),
            exp=int(data["exp"]),
            iat=int(data["iat"]),
            token_type=data.get("token_type", "access")
        )


class JWTHandler:
    """
    Handles JWT token generation and validation.

    Every failure mode of verify_token (bad signature, malformed token,
    missing claims, expiry) collapses into the same None result so callers
    cannot tell them apart.
    """

    def __init__(
        self,
        secret_key: Optional[str] = None,
        expires_in: int = ACCESS_TOKEN_EXPIRE_SECONDS
    ):
        """
        Initialize JWT handler.

        Args:
            secret_key: Secret key for signing tokens.
                       Falls back to JWT_SECRET_KEY env var or default.
            expires_in: Default token lifetime in seconds (30 days)
        """
        self.secret_key = (
            secret_key
            or os.getenv("JWT_SECRET_KEY")
            or DEFAULT_SECRET_KEY
        )
        self.expires_in = expires_in

        if self.secret_key == DEFAULT_SECRET_KEY:
            logger.warning(
                "Using default JWT secret key. "
                "Set JWT_SECRET_KEY environment variable in production!"
            )

    def create_access_token(
        self,
        user_id: str,
        expires_in: Optional[int] = None,
        issued_at: Optional[int] = None
    ) -> str:
        """
        Create an access token.

        Args:
            user_id: Unique user identifier
            expires_in: Custom expiration in seconds (default: handler lifetime)
            issued_at: Issue timestamp (default: now)

        Returns:
            Encoded JWT token string
        """
        now = int(time.time()) if issued_at is None else issued_at
        lifetime = self.expires_in if expires_in is None else expires_in
        exp = now + lifetime

        payload = TokenPayload(
            user_id=user_id,
            exp=exp,
            iat=now,
            token_type="access"
        )

        token = jwt.encode(payload.to_dict(), self.secret_key, algorithm=ALGORITHM)
        logger.debug(f"Created access token for user {user_id}, expires in {exp - now}s")
        return token

    def verify_token(self, token: str) -> Optional[TokenPayload]:
        """
        Verify and decode a token.

        Args:
            token: JWT token string

        Returns:
            TokenPayload if valid, None if invalid or expired
        """
        if not token:
            return None

        try:
            data = jwt.decode(token, self.secret_key, algorithms=[ALGORITHM])
            payload = TokenPayload.from_dict(data)
        except JWTError as e:
            logger.debug(f"Token verification failed: {e}")
            return None
        except (KeyError, TypeError, ValueError) as e:
            logger.debug(f"Token has malformed claims: {e}")
            return None

        # jose checks exp too; keep our own check so the rule is explicit
        if payload.exp <= int(time.time()):
            logger.debug("Token expired")
            return None

        if payload.token_type != "access":
            logger.debug(f"Unexpected token type: {payload.token_type}")
            return None

        return payload
