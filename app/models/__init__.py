"""Database models."""
from app.models.user import User
from app.models.club import Club, ClubMember
from app.models.membership import Membership
from app.models.event import Event, EventRegistration
from app.models.payment import Payment

__all__ = ["User", "Club", "ClubMember", "Membership", "Event", "EventRegistration", "Payment"]
