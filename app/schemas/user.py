"""User schemas."""
from pydantic import EmailStr, Field
from typing import Literal, Optional
from datetime import datetime

from app.schemas.common import CamelModel


class UserRegister(CamelModel):
    """Schema for registering a user after sign-up with the identity provider."""

    name: Optional[str] = None
    email: EmailStr
    photo_url: Optional[str] = Field(default=None, alias="photoURL")


class UserRegisterResponse(CamelModel):
    """Schema for the registration acknowledgement."""

    message: str
    role: str


class RoleResponse(CamelModel):
    """Schema for the caller's role."""

    role: str


class RoleUpdate(CamelModel):
    """Schema for changing a user's role."""

    role: Literal["admin", "clubManager", "member"]


class UserInDB(CamelModel):
    """Schema for user from database."""

    id: str
    email: str
    name: Optional[str] = None
    photo_url: Optional[str] = Field(default=None, alias="photoURL")
    role: str
    created_at: datetime
