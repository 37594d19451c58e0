"""Event schemas."""
from pydantic import Field, field_validator
from typing import Optional
from datetime import datetime

from app.schemas.common import CamelModel


def _blank_to_none(value):
    if isinstance(value, str) and not value.strip():
        return None
    return value


class EventCreate(CamelModel):
    """Schema for creating an event."""

    club_id: str = Field(..., min_length=1)
    title: str = Field(..., min_length=1)
    description: str = Field(..., min_length=1)
    event_date: datetime
    event_time: Optional[str] = None
    location: str = Field(..., min_length=1)
    is_paid: bool = False
    event_fee: Optional[float] = Field(default=0, ge=0)
    max_attendees: Optional[int] = Field(default=None, ge=1)
    banner_image: str = Field(..., min_length=1)

    @field_validator("max_attendees", "event_fee", mode="before")
    @classmethod
    def blank_numbers(cls, value):
        return _blank_to_none(value)


class EventUpdate(CamelModel):
    """Schema for updating an event."""

    title: Optional[str] = Field(default=None, min_length=1)
    description: Optional[str] = Field(default=None, min_length=1)
    event_date: Optional[datetime] = None
    event_time: Optional[str] = None
    location: Optional[str] = Field(default=None, min_length=1)
    is_paid: Optional[bool] = None
    event_fee: Optional[float] = Field(default=None, ge=0)
    max_attendees: Optional[int] = Field(default=None, ge=1)
    banner_image: Optional[str] = None

    @field_validator("max_attendees", "event_fee", mode="before")
    @classmethod
    def blank_numbers(cls, value):
        return _blank_to_none(value)


class EventInDB(CamelModel):
    """Schema for event from database, with its club's name and category."""

    id: str
    club_id: str
    club_name: Optional[str] = None
    category: Optional[str] = None
    title: str
    description: str
    event_date: datetime
    event_time: Optional[str] = None
    location: str
    is_paid: bool
    event_fee: float = 0
    max_attendees: Optional[int] = None
    registration_count: int = 0
    banner_image: Optional[str] = None
    created_at: datetime
    updated_at: Optional[datetime] = None


class EventCreateResponse(CamelModel):
    """Schema for the event creation acknowledgement."""

    message: str
    event_id: str
    event: EventInDB


class RegistrationInDB(CamelModel):
    """Schema for event registration from database."""

    id: str
    user_email: str
    event_id: str
    club_id: str
    status: str
    payment_id: Optional[str] = None
    registered_at: datetime


class RegisterEventResponse(CamelModel):
    """Schema for a successful free registration."""

    message: str
    registration: RegistrationInDB


class EventRegistrationItem(RegistrationInDB):
    """A registration together with the attendee's profile."""

    user_name: Optional[str] = None
    photo_url: Optional[str] = Field(default=None, alias="photoURL")


class MemberEventItem(RegistrationInDB):
    """A member's registration together with the event it is for."""

    title: Optional[str] = None
    event_date: Optional[datetime] = None
    event_time: Optional[str] = None
    location: Optional[str] = None
    club_name: Optional[str] = None
    is_paid: Optional[bool] = None
    event_fee: Optional[float] = None
