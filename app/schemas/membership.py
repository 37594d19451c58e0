"""Membership schemas."""
from pydantic import Field
from typing import Optional
from datetime import datetime

from app.schemas.common import CamelModel


class MembershipInDB(CamelModel):
    """Schema for membership from database."""

    id: str
    user_email: str
    club_id: str
    status: str
    payment_id: Optional[str] = None
    joined_at: datetime
    expires_at: Optional[datetime] = None


class JoinClubResponse(CamelModel):
    """Schema for a successful free join."""

    message: str
    membership: MembershipInDB


class MembershipStatusResponse(CamelModel):
    """Schema for the outcome of an expiry request."""

    message: str
    membership: MembershipInDB


class MemberClubItem(MembershipInDB):
    """A member's membership together with the club it belongs to."""

    club_name: Optional[str] = None
    location: Optional[str] = None
    category: Optional[str] = None
    membership_fee: Optional[float] = None


class ClubMemberItem(MembershipInDB):
    """A club's membership together with the member's profile."""

    user_name: Optional[str] = None
    photo_url: Optional[str] = Field(default=None, alias="photoURL")
