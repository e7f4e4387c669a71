"""
User authentication service.

Registration and password login. Both return a fresh bearer token plus the
public user record.
"""

import logging
from typing import Optional
from dataclasses import dataclass

from ..auth import JWTHandler, UserStore, User, normalize_email
from ..errors import ValidationError, DuplicateEmailError, InvalidCredentialsError

logger = logging.getLogger(__name__)

NAME_MIN_LENGTH = 2
PASSWORD_MIN_LENGTH = 6


@dataclass
class AuthResult:
    """Authentication result: a fresh bearer token and the public user record."""
    token: str
    user: User


class UserAuthService:
    """
    Service for user authentication.

    Handles:
    - User registration (name + email + password)
    - Login with email and password
    """

    def __init__(
        self,
        jwt_handler: Optional[JWTHandler] = None,
        user_store: Optional[UserStore] = None
    ):
        """
        Initialize auth service.

        Args:
            jwt_handler: Optional JWT handler (creates default if not provided)
            user_store: Optional user store (creates default if not provided)
        """
        self.jwt = jwt_handler or JWTHandler()
        self.users = user_store or UserStore()

    def _issue(self, user: User) -> AuthResult:
        token = self.jwt.create_access_token(user_id=user.user_id)
        return AuthResult(token=token, user=user)

    def register(self, name: str, email: str, password: str) -> AuthResult:
        """
        Register a new user.

        Args:
            name: Display name (at least 2 characters)
            email: Email address
            password: Password (at least 6 characters)

        Returns:
            AuthResult with a token for the new user

        Raises:
            ValidationError: If any field is malformed
            DuplicateEmailError: If the email is already registered
        """
        errors = []
        if not name or len(name.strip()) < NAME_MIN_LENGTH:
            errors.append({"field": "name", "message": "Name must be at least 2 characters"})
        normalized = normalize_email(email)
        if not normalized:
            errors.append({"field": "email", "message": "Please provide a valid email"})
        if not password or len(password) < PASSWORD_MIN_LENGTH:
            errors.append({"field": "password", "message": "Password must be at least 6 characters"})
        if errors:
            raise ValidationError(errors)

        if self.users.email_exists(normalized):
            raise DuplicateEmailError()

        try:
            user = self.users.create_user(name=name, email=normalized, password=password)
        except DuplicateEmailError:
            raise
        except ValueError as e:
            # Password the hasher refuses (e.g. over 72 bytes)
            raise ValidationError.for_field("password", str(e))

        logger.info(f"User registered: {user.email}")
        return self._issue(user)

    def login_password(self, email: str, password: str) -> AuthResult:
        """
        Login with email and password.

        Raises:
            InvalidCredentialsError: Unknown email or wrong password
        """
        user = self.users.verify_password(email, password)
        if not user:
            logger.info(f"Failed login for {normalize_email(email) or '<invalid email>'}")
            raise InvalidCredentialsError()

        user = self.users.record_login(user.user_id) or user

        logger.info(f"User logged in: {user.email}")
        return self._issue(user)
