"""Club schemas."""
from pydantic import AliasChoices, Field
from typing import List, Literal, Optional
from datetime import datetime

from app.schemas.common import CamelModel


class ClubCreate(CamelModel):
    """Schema for submitting a new club for review."""

    name: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    category: str = Field(..., min_length=1)
    location: str = Field(..., min_length=1)
    membership_fee: float = Field(..., ge=0, strict=True)
    banner_image: Optional[str] = None
    meeting_schedule: Optional[str] = None


class ClubUpdate(CamelModel):
    """Schema for updating a club's content fields."""

    club_name: Optional[str] = Field(
        default=None,
        min_length=1,
        validation_alias=AliasChoices("name", "clubName", "club_name"),
    )
    description: Optional[str] = Field(default=None, min_length=1)
    category: Optional[str] = Field(default=None, min_length=1)
    location: Optional[str] = Field(default=None, min_length=1)
    banner_image: Optional[str] = None
    membership_fee: Optional[float] = Field(default=None, ge=0, strict=True)
    meeting_schedule: Optional[str] = None


class ClubStatusUpdate(CamelModel):
    """Schema for an admin review decision."""

    status: Literal["approved", "rejected"]


class ClubPublic(CamelModel):
    """Schema for a club as shown to anyone."""

    id: str
    club_name: str
    description: str
    category: str
    location: str
    banner_image: Optional[str] = None
    membership_fee: float = 0
    meeting_schedule: Optional[str] = None
    manager_email: str
    status: str
    members_count: int = 0
    events_count: int = 0
    created_at: datetime
    updated_at: Optional[datetime] = None


class ClubInDB(ClubPublic):
    """Schema for a club as shown to its manager or an admin."""

    members: List[str] = Field(default_factory=list, validation_alias="member_emails")


class ClubCreateResponse(CamelModel):
    """Schema for the club submission acknowledgement."""

    message: str
    club_id: str
    club: ClubInDB
