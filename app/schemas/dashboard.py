"""Dashboard schemas."""
from typing import List

from app.schemas.common import CamelModel
from app.schemas.event import EventInDB


class MemberOverview(CamelModel):
    """Schema for the member dashboard."""

    total_clubs: int
    total_events: int
    total_payments: float
    upcoming_events: List[EventInDB]


class ManagerStats(CamelModel):
    """Schema for the manager dashboard."""

    total_clubs: int
    total_members: int
    total_events: int
    total_revenue: float


class AdminStats(CamelModel):
    """Schema for the admin dashboard."""

    total_users: int
    total_clubs: int
    pending_clubs: int
    approved_clubs: int
    total_memberships: int
    total_events: int
    total_revenue: float
