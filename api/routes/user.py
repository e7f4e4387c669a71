"""
User profile endpoints.
"""

from typing import Optional

from fastapi import APIRouter
from pydantic import BaseModel, EmailStr, Field, field_validator

from ..deps import ServicesDep, CurrentIdentity
from ..schemas import ApiModel, UserSummary

router = APIRouter()


class ProfileUpdateRequest(BaseModel):
    """Profile update; omitted fields stay unchanged."""
    name: Optional[str] = Field(None, min_length=2, description="Display name (min 2 chars)")
    email: Optional[EmailStr] = Field(None, description="Email address")

    @field_validator("name", mode="before")
    @classmethod
    def strip_name(cls, value):
        return value.strip() if isinstance(value, str) else value

    @field_validator("email", mode="before")
    @classmethod
    def blank_email_is_none(cls, value):
        if isinstance(value, str) and not value.strip():
            return None
        return value


class ProfileResponse(ApiModel):
    """Profile response."""
    success: bool = True
    message: Optional[str] = None
    data: UserSummary


@router.get("/profile", response_model=ProfileResponse)
def get_profile(identity: CurrentIdentity, services: ServicesDep):
    """Get the authenticated user's profile."""
    user = services.profiles.get_profile(identity)
    return ProfileResponse(data=UserSummary.from_user(user))


@router.put("/profile", response_model=ProfileResponse)
def update_profile(
    request: ProfileUpdateRequest,
    identity: CurrentIdentity,
    services: ServicesDep
):
    """
    Update the authenticated user's name and/or email.

    A new email must not belong to any other account.
    """
    user = services.profiles.update_profile(
        identity,
        name=request.name,
        email=request.email
    )
    return ProfileResponse(
        message="Profile updated successfully",
        data=UserSummary.from_user(user)
    )
