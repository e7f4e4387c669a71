"""
Profile service.

Reads and updates the caller's own user record.
"""

import logging
from typing import Optional

from ..auth import UserStore, User, Identity, normalize_email
from ..errors import ValidationError, UserNotFoundError
from .user_auth_service import NAME_MIN_LENGTH

logger = logging.getLogger(__name__)


class ProfileService:
    """Profile lookups and edits, always for the authenticated caller."""

    def __init__(self, user_store: UserStore):
        self.users = user_store

    def get_profile(self, identity: Identity) -> User:
        """
        Get the caller's profile.

        Raises:
            UserNotFoundError: If the account disappeared after authentication
        """
        user = self.users.get_by_id(identity.user_id)
        if user is None:
            raise UserNotFoundError()
        return user

    def update_profile(
        self,
        identity: Identity,
        name: Optional[str] = None,
        email: Optional[str] = None
    ) -> User:
        """
        Update the caller's name and/or email.

        Empty values are treated as "not provided".

        Raises:
            ValidationError: Name too short or email malformed
            DuplicateEmailError: Email belongs to another account
            UserNotFoundError: Account no longer exists
        """
        name = name.strip() if name and name.strip() else None
        email = email.strip() if email and email.strip() else None

        errors = []
        if name is not None and len(name) < NAME_MIN_LENGTH:
            errors.append({"field": "name", "message": "Name must be at least 2 characters"})
        if email is not None and not normalize_email(email):
            errors.append({"field": "email", "message": "Please provide a valid email"})
        if errors:
            raise ValidationError(errors)

        user = self.users.update_profile(identity.user_id, name=name, email=email)
        logger.info(f"Profile updated: {user.user_id}")
        return user
