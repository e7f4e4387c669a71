"""
Password handling utilities.

Uses bcrypt for secure password hashing.
"""

import logging
from typing import Optional

import bcrypt
from email_validator import validate_email, EmailNotValidError

logger = logging.getLogger(__name__)

# bcrypt work factor (higher = more secure but slower)
BCRYPT_ROUNDS = 12

# bcrypt only looks at the first 72 bytes of input
BCRYPT_MAX_BYTES = 72


class PasswordHandler:
    """
    Handles password hashing and verification using bcrypt.

    Usage:
        handler = PasswordHandler()
        hashed = handler.hash("my_password")
        is_valid = handler.verify("my_password", hashed)
    """

    def __init__(self, rounds: int = BCRYPT_ROUNDS):
        """
        Initialize password handler.

        Args:
            rounds: bcrypt work factor (default: 12)
        """
        self.rounds = rounds

    def hash(self, password: str) -> str:
        """
        Hash a password using bcrypt.

        Args:
            password: Plain text password

        Returns:
            Hashed password string (includes salt)

        Raises:
            ValueError: If password is empty or longer than 72 bytes
        """
        if not password:
            raise ValueError("Password cannot be empty")

        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_BYTES:
            raise ValueError(f"Password cannot be longer than {BCRYPT_MAX_BYTES} bytes")

        salt = bcrypt.gensalt(rounds=self.rounds)
        hashed = bcrypt.hashpw(encoded, salt)

        return hashed.decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        """
        Verify a password against a hash.

        Args:
            password: Plain text password to verify
            hashed: Previously hashed password

        Returns:
            True if password matches, False otherwise
        """
        if not password or not hashed:
            return False

        encoded = password.encode("utf-8")
        if len(encoded) > BCRYPT_MAX_BYTES:
            return False

        try:
            return bcrypt.checkpw(encoded, hashed.encode("utf-8"))
        except ValueError as e:
            logger.warning(f"Password verification error: {e}")
            return False


def normalize_email(email: Optional[str]) -> Optional[str]:
    """
    Normalize an email address for storage and lookup.

    Validates with email-validator (same rules as the API's EmailStr),
    then lower-cases the whole address.

    Returns:
        Normalized email or None if it is not a valid address

    Examples:
        normalize_email("  Jane@Example.COM ") -> "jane@example.com"
        normalize_email("not-an-email") -> None
        normalize_email("a@b") -> None
    """
    if not email:
        return None

    try:
        result = validate_email(email.strip(), check_deliverability=False)
    except EmailNotValidError:
        return None

    return result.normalized.lower()
