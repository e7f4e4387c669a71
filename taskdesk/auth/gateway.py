"""
Request authentication gateway.

Turns the bearer token of an incoming request into an Identity,
or rejects the request. Downstream services only ever receive the
Identity produced here.
"""

import logging
from typing import Optional
from dataclasses import dataclass

from .jwt_handler import JWTHandler
from .users import UserStore, User
from ..errors import MissingCredentialsError, InvalidTokenError, UnknownUserError

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Identity:
    """The authenticated caller."""
    user_id: str
    name: str
    email: str

    @classmethod
    def from_user(cls, user: User) -> "Identity":
        return cls(user_id=user.user_id, name=user.name, email=user.email)


class AuthGateway:
    """
    Authenticates requests.

    States per request:
    - no bearer token        -> MissingCredentialsError (401)
    - token fails to verify  -> InvalidTokenError (403)
    - token user is gone     -> UnknownUserError (401)
    - otherwise              -> Identity
    """

    def __init__(self, jwt_handler: JWTHandler, user_store: UserStore):
        self.jwt = jwt_handler
        self.users = user_store

    def authenticate(self, token: Optional[str]) -> Identity:
        """
        Authenticate a request from its bearer token.

        Args:
            token: Credentials from "Authorization: Bearer <token>",
                or None if the request carried no bearer header

        Returns:
            Identity of the caller

        Raises:
            MissingCredentialsError: No bearer token present
            InvalidTokenError: Token is malformed, tampered with, or expired
            UnknownUserError: Token is valid but the user no longer exists
        """
        token = token.strip() if token else None
        if not token:
            raise MissingCredentialsError()

        payload = self.jwt.verify_token(token)
        if payload is None:
            raise InvalidTokenError()

        user = self.users.get_by_id(payload.user_id)
        if user is None:
            logger.info(f"Valid token for unknown user {payload.user_id}")
            raise UnknownUserError()

        return Identity.from_user(user)
