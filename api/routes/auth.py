"""
Authentication endpoints.

Handles user registration, login and logout.
"""

import logging

from fastapi import APIRouter, status
from pydantic import BaseModel, EmailStr, Field, field_validator

from ..deps import ServicesDep, CurrentIdentity
from ..schemas import ApiModel, UserSummary, MessageResponse
from taskdesk.services import AuthResult

logger = logging.getLogger(__name__)

router = APIRouter()


# Request/Response models

class RegisterRequest(BaseModel):
    """User registration request."""
    name: str = Field(..., min_length=2, description="Display name (min 2 chars)")
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=6, description="Password (min 6 chars)")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value


class LoginRequest(BaseModel):
    """Login request."""
    email: EmailStr = Field(..., description="Email address")
    password: str = Field(..., min_length=1, description="Password")


class AuthData(UserSummary):
    """User summary plus bearer token."""
    token: str


class AuthResponse(ApiModel):
    """Authentication response with token and user info."""
    success: bool = True
    message: str
    data: AuthData


def _auth_response(result: AuthResult, message: str) -> AuthResponse:
    summary = UserSummary.from_user(result.user)
    return AuthResponse(
        message=message,
        data=AuthData(**summary.model_dump(), token=result.token)
    )


# Endpoints

@router.post("/register", response_model=AuthResponse, status_code=status.HTTP_201_CREATED)
def register(request: RegisterRequest, services: ServicesDep):
    """
    Register a new user.

    Creates a new account and returns a bearer token on success.
    """
    result = services.user_auth.register(
        name=request.name,
        email=request.email,
        password=request.password
    )
    return _auth_response(result, "User registered successfully")


@router.post("/login", response_model=AuthResponse)
def login(request: LoginRequest, services: ServicesDep):
    """
    Login with email and password.

    Returns a bearer token on success.
    """
    result = services.user_auth.login_password(
        email=request.email,
        password=request.password
    )
    return _auth_response(result, "Login successful")


@router.post("/logout", response_model=MessageResponse)
def logout(identity: CurrentIdentity):
    """
    Logout.

    Tokens are stateless, so this only acknowledges; the client drops its token.
    """
    logger.info(f"User logged out: {identity.user_id}")
    return MessageResponse(message="Logout successful")
