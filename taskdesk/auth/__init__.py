"""
Authentication module for TaskDesk.

Provides bcrypt password hashing, a JSON-backed credential store,
stateless JWT bearer tokens and the request gateway that ties them together.
"""

from .jwt_handler import JWTHandler, TokenPayload
from .password import PasswordHandler, normalize_email
from .users import UserStore, User, UserWithSecret
from .gateway import AuthGateway, Identity

__all__ = [
    "JWTHandler",
    "TokenPayload",
    "PasswordHandler",
    "normalize_email",
    "UserStore",
    "User",
    "UserWithSecret",
    "AuthGateway",
    "Identity",
]
